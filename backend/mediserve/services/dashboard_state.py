"""
Dashboard State: the per-pharmacy view the owner dashboard works from.

Holds the profile, a stock snapshot and the notification store. Instances
are immutable; every change goes through one of the with_* functions,
which return a new state.
"""
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from mediserve.models.medicine import Medicine
from mediserve.models.notification import Notification
from mediserve.models.pharmacy import Pharmacy


@dataclass(frozen=True)
class ProfileSnapshot:
    id: int
    owner_name: str
    pharmacy_name: str
    email: str
    is_open: bool

    @classmethod
    def from_model(cls, pharmacy: Pharmacy) -> "ProfileSnapshot":
        return cls(
            id=pharmacy.id,
            owner_name=pharmacy.owner_name,
            pharmacy_name=pharmacy.pharmacy_name,
            email=pharmacy.email,
            is_open=bool(pharmacy.is_open),
        )


@dataclass(frozen=True)
class MedicineSnapshot:
    id: int
    name: str
    brand: str
    quantity: int
    expiry_date: date
    price: Decimal
    low_stock_threshold: int

    @classmethod
    def from_model(cls, medicine: Medicine) -> "MedicineSnapshot":
        return cls(
            id=medicine.id,
            name=medicine.name,
            brand=medicine.brand,
            quantity=int(medicine.quantity),
            expiry_date=medicine.expiry_date,
            price=Decimal(str(medicine.price)),
            low_stock_threshold=int(medicine.low_stock_threshold),
        )


@dataclass(frozen=True)
class NotificationRecord:
    id: int
    type: str
    message: str
    date: datetime
    is_read: bool

    @classmethod
    def from_model(cls, notification: Notification) -> "NotificationRecord":
        return cls(
            id=notification.id,
            type=notification.type,
            message=notification.message,
            date=notification.created_at,
            is_read=bool(notification.is_read),
        )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "message": self.message,
            "date": self.date,
            "is_read": self.is_read,
        }


@dataclass(frozen=True)
class NotificationStore:
    """Ordered (emission order) notifications for one pharmacy."""
    items: Tuple[NotificationRecord, ...] = ()

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.items if not n.is_read)

    def has_message(self, message: str) -> bool:
        return any(n.message == message for n in self.items)

    def sorted_by_recency(self) -> list:
        return sorted(self.items, key=lambda n: (n.date, n.id), reverse=True)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class DashboardState:
    pharmacy_id: int
    profile: Optional[ProfileSnapshot] = None
    stock: Tuple[MedicineSnapshot, ...] = ()
    notifications: NotificationStore = field(default_factory=NotificationStore)

    @property
    def unread_count(self) -> int:
        return self.notifications.unread_count


def with_notification(state: DashboardState, record: NotificationRecord) -> DashboardState:
    store = NotificationStore(items=state.notifications.items + (record,))
    return replace(state, notifications=store)


def with_all_read(state: DashboardState) -> DashboardState:
    items = tuple(n if n.is_read else replace(n, is_read=True) for n in state.notifications.items)
    return replace(state, notifications=NotificationStore(items=items))


def with_profile(state: DashboardState, profile: ProfileSnapshot) -> DashboardState:
    return replace(state, profile=profile)


def with_stock(state: DashboardState, medicines: Iterable[MedicineSnapshot]) -> DashboardState:
    return replace(state, stock=tuple(medicines))


def load_dashboard_state(db: Session, pharmacy: Pharmacy) -> DashboardState:
    """Read profile, stock and notifications for one pharmacy."""
    medicines = (
        db.query(Medicine)
        .filter(Medicine.pharmacy_id == pharmacy.id)
        .order_by(Medicine.name)
        .all()
    )
    notifications = (
        db.query(Notification)
        .filter(Notification.pharmacy_id == pharmacy.id)
        .order_by(Notification.created_at, Notification.id)
        .all()
    )
    state = DashboardState(pharmacy_id=pharmacy.id)
    state = with_profile(state, ProfileSnapshot.from_model(pharmacy))
    state = with_stock(state, (MedicineSnapshot.from_model(m) for m in medicines))
    return replace(
        state,
        notifications=NotificationStore(items=tuple(NotificationRecord.from_model(n) for n in notifications)),
    )
