"""Condition scanner: message wording and which conditions fire."""
from datetime import date, timedelta
from types import SimpleNamespace

from mediserve.models.notification import NotificationType
from mediserve.services.condition_scanner import (
    Candidate,
    days_until_expiry,
    new_prescription_candidate,
    scan_medicine,
    scan_stock,
)

TODAY = date(2026, 3, 1)


def med(name, quantity, threshold, expires_in_days=365):
    return SimpleNamespace(
        name=name,
        quantity=quantity,
        low_stock_threshold=threshold,
        expiry_date=TODAY + timedelta(days=expires_in_days),
    )


def test_out_of_stock_uses_out_of_stock_message():
    candidates = scan_medicine(med("Metformin", 0, 20), today=TODAY)
    assert candidates == [Candidate(NotificationType.LOW_STOCK, "Metformin is out of stock.")]


def test_low_stock_message_includes_remaining_quantity():
    candidates = scan_medicine(med("Ibuprofen", 45, 50), today=TODAY)
    assert candidates == [
        Candidate(NotificationType.LOW_STOCK, "Ibuprofen is running low on stock (45 remaining).")
    ]


def test_quantity_at_threshold_is_not_low():
    assert scan_medicine(med("Paracetamol", 50, 50), today=TODAY) == []


def test_out_of_stock_fires_even_with_zero_threshold():
    candidates = scan_medicine(med("Cetirizine", 0, 0), today=TODAY)
    assert [c.message for c in candidates] == ["Cetirizine is out of stock."]


def test_expiring_within_window():
    candidates = scan_medicine(med("Amoxicillin", 200, 75, expires_in_days=10), today=TODAY)
    assert candidates == [Candidate(NotificationType.EXPIRY, "Amoxicillin is expiring in 10 days.")]


def test_expiry_window_edges():
    assert [c.message for c in scan_medicine(med("A", 100, 10, expires_in_days=30), today=TODAY)] == [
        "A is expiring in 30 days."
    ]
    assert scan_medicine(med("A", 100, 10, expires_in_days=31), today=TODAY) == []


def test_expiring_today_counts_as_expired():
    candidates = scan_medicine(med("Lisinopril", 70, 50, expires_in_days=0), today=TODAY)
    assert [c.message for c in candidates] == ["Lisinopril has expired."]


def test_past_expiry_is_expired():
    candidates = scan_medicine(med("Lisinopril", 70, 50, expires_in_days=-40), today=TODAY)
    assert [c.message for c in candidates] == ["Lisinopril has expired."]


def test_expiry_and_stock_evaluated_independently():
    candidates = scan_medicine(med("Metformin", 10, 20, expires_in_days=5), today=TODAY)
    assert [c.type for c in candidates] == [NotificationType.EXPIRY, NotificationType.LOW_STOCK]
    assert [c.message for c in candidates] == [
        "Metformin is expiring in 5 days.",
        "Metformin is running low on stock (10 remaining).",
    ]


def test_custom_window():
    candidates = scan_medicine(med("Amlodipine", 90, 40, expires_in_days=45), today=TODAY, window_days=60)
    assert [c.message for c in candidates] == ["Amlodipine is expiring in 45 days."]


def test_scan_stock_collects_all_candidates():
    stock = [
        med("Paracetamol", 150, 50),
        med("Ibuprofen", 45, 50),
        med("Metformin", 0, 20),
    ]
    messages = [c.message for c in scan_stock(stock, today=TODAY)]
    assert messages == [
        "Ibuprofen is running low on stock (45 remaining).",
        "Metformin is out of stock.",
    ]


def test_days_until_expiry():
    assert days_until_expiry(date(2026, 3, 11), TODAY) == 10
    assert days_until_expiry(date(2026, 2, 27), TODAY) == -2


def test_new_prescription_message():
    candidate = new_prescription_candidate("Dr. Miller", "Diana Prince")
    assert candidate.type == NotificationType.NEW_PRESCRIPTION
    assert candidate.message == "New prescription received from Dr. Miller for Diana Prince."
