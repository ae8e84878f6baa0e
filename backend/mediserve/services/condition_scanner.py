"""
Condition Scanner: derives candidate notifications from the stock list.

Pure functions of (stock, today). Nothing here touches the database;
candidates go through the dedup gate in notification_service before
anything is persisted.

Rules per medicine (expiry and stock evaluated independently):
- expiring within the window  -> "<name> is expiring in N days."
- expiry date today or past   -> "<name> has expired."
- quantity == 0               -> "<name> is out of stock."
- quantity < threshold        -> "<name> is running low on stock (<qty> remaining)."
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from mediserve.core.config import settings
from mediserve.models.notification import NotificationType


@dataclass(frozen=True)
class Candidate:
    type: str
    message: str


def days_until_expiry(expiry_date: date, today: date) -> int:
    return (expiry_date - today).days


def expiry_candidate(medicine, today: date, window_days: int) -> Optional[Candidate]:
    if medicine.expiry_date is None:
        return None
    days = days_until_expiry(medicine.expiry_date, today)
    if days <= 0:
        return Candidate(NotificationType.EXPIRY, f"{medicine.name} has expired.")
    if days <= window_days:
        return Candidate(NotificationType.EXPIRY, f"{medicine.name} is expiring in {days} days.")
    return None


def stock_candidate(medicine) -> Optional[Candidate]:
    quantity = int(medicine.quantity)
    if quantity == 0:
        return Candidate(NotificationType.LOW_STOCK, f"{medicine.name} is out of stock.")
    if quantity < int(medicine.low_stock_threshold):
        return Candidate(
            NotificationType.LOW_STOCK,
            f"{medicine.name} is running low on stock ({quantity} remaining).",
        )
    return None


def scan_medicine(medicine, today: date = None, window_days: int = None) -> List[Candidate]:
    """Candidates for one medicine. Expiry first, then stock."""
    today = today or date.today()
    window_days = settings.EXPIRY_WINDOW_DAYS if window_days is None else window_days
    found = [expiry_candidate(medicine, today, window_days), stock_candidate(medicine)]
    return [c for c in found if c is not None]


def scan_stock(medicines: Iterable, today: date = None, window_days: int = None) -> List[Candidate]:
    today = today or date.today()
    candidates: List[Candidate] = []
    for medicine in medicines:
        candidates.extend(scan_medicine(medicine, today, window_days))
    return candidates


def new_prescription_candidate(doctor_name: str, patient_name: str) -> Candidate:
    return Candidate(
        NotificationType.NEW_PRESCRIPTION,
        f"New prescription received from {doctor_name} for {patient_name}.",
    )
