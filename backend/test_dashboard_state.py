"""Dashboard state update functions never mutate the state they are given."""
from datetime import date, datetime
from decimal import Decimal

from conftest import add_medicine
from mediserve.services.dashboard_state import (
    DashboardState,
    MedicineSnapshot,
    NotificationRecord,
    ProfileSnapshot,
    load_dashboard_state,
    with_all_read,
    with_notification,
    with_profile,
    with_stock,
)


def record(id, is_read=False, minute=0):
    return NotificationRecord(
        id=id,
        type="low-stock",
        message=f"Medicine {id} is out of stock.",
        date=datetime(2026, 1, 1, 9, minute),
        is_read=is_read,
    )


def test_with_notification_returns_new_state():
    state = DashboardState(pharmacy_id=1)
    updated = with_notification(state, record(1))

    assert len(state.notifications) == 0
    assert len(updated.notifications) == 1
    assert updated.unread_count == 1
    assert updated.notifications.has_message("Medicine 1 is out of stock.")


def test_with_all_read_keeps_order_and_count():
    state = DashboardState(pharmacy_id=1)
    for i, is_read in enumerate([False, True, False]):
        state = with_notification(state, record(i, is_read=is_read, minute=i))

    updated = with_all_read(state)

    assert state.unread_count == 2
    assert updated.unread_count == 0
    assert [n.id for n in updated.notifications.items] == [0, 1, 2]


def test_with_profile_and_stock():
    state = DashboardState(pharmacy_id=1)
    profile = ProfileSnapshot(id=1, owner_name="Owner", pharmacy_name="MediServe", email="o@x.com", is_open=False)
    medicine = MedicineSnapshot(
        id=7, name="Ibuprofen", brand="Advil", quantity=45,
        expiry_date=date(2027, 1, 1), price=Decimal("8.50"), low_stock_threshold=50,
    )

    updated = with_stock(with_profile(state, profile), [medicine])

    assert state.profile is None
    assert state.stock == ()
    assert updated.profile.is_open is False
    assert updated.stock == (medicine,)


def test_load_dashboard_state(db, pharmacy):
    add_medicine(db, pharmacy, "Paracetamol", 150, 50)
    add_medicine(db, pharmacy, "Amoxicillin", 200, 75)

    state = load_dashboard_state(db, pharmacy)

    assert state.pharmacy_id == pharmacy.id
    assert state.profile.pharmacy_name == "Test Pharmacy"
    assert [m.name for m in state.stock] == ["Amoxicillin", "Paracetamol"]
    assert state.unread_count == 0
