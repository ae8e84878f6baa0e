"""Dedup gate, stock scan idempotence and mark-all-read against a real (in-memory) DB."""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError

from conftest import add_medicine, make_pharmacy
from mediserve.models.notification import Notification, NotificationType
from mediserve.services.condition_scanner import Candidate
from mediserve.services.notification_service import NotificationCenter


def stored_messages(db, pharmacy):
    return sorted(
        n.message for n in db.query(Notification).filter(Notification.pharmacy_id == pharmacy.id).all()
    )


def test_scan_emits_one_low_stock_notification_per_medicine(db, pharmacy):
    add_medicine(db, pharmacy, "Ibuprofen", 45, 50)
    add_medicine(db, pharmacy, "Metformin", 0, 20)
    add_medicine(db, pharmacy, "Paracetamol", 150, 50)

    center = NotificationCenter.load(db, pharmacy)
    outcome = center.scan()

    assert len(outcome.emitted) == 2
    assert outcome.suppressed == 0
    assert stored_messages(db, pharmacy) == [
        "Ibuprofen is running low on stock (45 remaining).",
        "Metformin is out of stock.",
    ]
    assert center.state.unread_count == 2
    assert all(r.type == NotificationType.LOW_STOCK for r in outcome.emitted)


def test_second_scan_over_unchanged_stock_adds_nothing(db, pharmacy):
    add_medicine(db, pharmacy, "Ibuprofen", 45, 50)
    add_medicine(db, pharmacy, "Metformin", 0, 20, expires_in_days=7)

    center = NotificationCenter.load(db, pharmacy)
    first = center.scan()
    second = center.scan()

    assert len(first.emitted) == 3
    assert second.emitted == []
    assert second.suppressed == 3
    assert db.query(Notification).count() == 3
    assert len(center.state.notifications) == 3


def test_dedup_survives_reload(db, pharmacy):
    add_medicine(db, pharmacy, "Ibuprofen", 45, 50)
    NotificationCenter.load(db, pharmacy).scan()

    outcome = NotificationCenter.load(db, pharmacy).scan()

    assert outcome.emitted == []
    assert db.query(Notification).count() == 1


def test_stale_local_state_is_covered_by_database_check(db, pharmacy):
    add_medicine(db, pharmacy, "Ibuprofen", 45, 50)
    first = NotificationCenter.load(db, pharmacy)
    second = NotificationCenter.load(db, pharmacy)  # loaded before first scans

    first.scan()
    outcome = second.scan()

    assert outcome.emitted == []
    assert outcome.suppressed == 1
    assert db.query(Notification).count() == 1


def test_concurrent_insert_is_suppressed_by_unique_constraint(db, pharmacy, monkeypatch):
    add_medicine(db, pharmacy, "Ibuprofen", 45, 50)
    first = NotificationCenter.load(db, pharmacy)
    second = NotificationCenter.load(db, pharmacy)
    first.scan()

    # Both scans saw "not found" before either wrote
    monkeypatch.setattr(second, "_exists_in_db", lambda message: False)
    outcome = second.scan()

    assert outcome.emitted == []
    assert outcome.suppressed == 1
    assert outcome.failed == 0
    assert db.query(Notification).count() == 1
    assert len(second.state.notifications) == 0


def test_same_message_allowed_for_different_pharmacies(db, pharmacy):
    other = make_pharmacy(db, email="other@test.com", name="Other Pharmacy")
    add_medicine(db, pharmacy, "Ibuprofen", 45, 50)
    add_medicine(db, other, "Ibuprofen", 45, 50)

    NotificationCenter.load(db, pharmacy).scan()
    NotificationCenter.load(db, other).scan()

    assert stored_messages(db, pharmacy) == stored_messages(db, other)
    assert db.query(Notification).count() == 2


def test_emit_explicit_event(db, pharmacy):
    center = NotificationCenter.load(db, pharmacy)
    candidate = Candidate(NotificationType.NEW_PRESCRIPTION, "New prescription received from Dr. Smith for Alice Johnson.")

    record = center.emit(candidate)
    again = center.emit(candidate)

    assert record is not None
    assert record.is_read is False
    assert record.id is not None
    assert again is None
    assert center.state.unread_count == 1


def seed_notifications(db, pharmacy, unread, read):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for i in range(unread + read):
        db.add(Notification(
            pharmacy_id=pharmacy.id,
            type=NotificationType.LOW_STOCK,
            message=f"Medicine {i} is out of stock.",
            created_at=base + timedelta(minutes=i),
            is_read=i >= unread,
        ))
    db.commit()


def test_mark_all_read(db, pharmacy):
    seed_notifications(db, pharmacy, unread=3, read=2)
    center = NotificationCenter.load(db, pharmacy)
    assert center.state.unread_count == 3

    updated = center.mark_all_read()

    assert updated == 3
    assert center.state.unread_count == 0
    assert all(n.is_read for n in center.state.notifications.items)
    assert len(center.state.notifications) == 5
    db.expire_all()
    assert all(n.is_read for n in db.query(Notification).all())


def test_failed_mark_all_read_leaves_state_unchanged(db, pharmacy, monkeypatch):
    seed_notifications(db, pharmacy, unread=3, read=2)
    center = NotificationCenter.load(db, pharmacy)
    before = center.state

    def failing_commit():
        raise SQLAlchemyError("database unavailable")

    monkeypatch.setattr(center.db, "commit", failing_commit)
    with pytest.raises(SQLAlchemyError):
        center.mark_all_read()
    monkeypatch.undo()

    assert center.state is before
    assert center.state.unread_count == 3
    db.expire_all()
    assert db.query(Notification).filter(Notification.is_read.is_(False)).count() == 3


def test_sorted_by_recency(db, pharmacy):
    seed_notifications(db, pharmacy, unread=2, read=1)
    center = NotificationCenter.load(db, pharmacy)

    messages = [n.message for n in center.state.notifications.sorted_by_recency()]

    assert messages == [
        "Medicine 2 is out of stock.",
        "Medicine 1 is out of stock.",
        "Medicine 0 is out of stock.",
    ]
