"""
Notification Center: dedup gate, stock scan and mark-all-read.

DEDUP RULE:
A candidate is emitted only if no notification with the identical message
exists for the pharmacy, checked against:
1. the local store (already-loaded state)
2. the notifications table
3. the (pharmacy_id, message) unique constraint, for scans racing each other

Suppression is silent: no error, nothing persisted.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from mediserve.models.notification import Notification
from mediserve.models.pharmacy import Pharmacy
from mediserve.services.condition_scanner import Candidate, scan_stock
from mediserve.services.dashboard_state import (
    DashboardState,
    NotificationRecord,
    load_dashboard_state,
    with_all_read,
    with_notification,
)

logger = logging.getLogger(__name__)


@dataclass
class ScanOutcome:
    emitted: List[NotificationRecord] = field(default_factory=list)
    suppressed: int = 0
    failed: int = 0


class NotificationCenter:
    """Owns the dashboard state of one pharmacy while a request or scan runs."""

    def __init__(self, db: Session, state: DashboardState):
        self.db = db
        self.state = state

    @classmethod
    def load(cls, db: Session, pharmacy: Pharmacy) -> "NotificationCenter":
        return cls(db, load_dashboard_state(db, pharmacy))

    @property
    def pharmacy_id(self) -> int:
        return self.state.pharmacy_id

    def _exists_in_db(self, message: str) -> bool:
        row = (
            self.db.query(Notification.id)
            .filter(Notification.pharmacy_id == self.pharmacy_id, Notification.message == message)
            .first()
        )
        return row is not None

    def emit(self, candidate: Candidate) -> Optional[NotificationRecord]:
        """Persist and append the candidate, or return None if it is a duplicate."""
        if self.state.notifications.has_message(candidate.message):
            logger.debug(f"[Notifications] Suppressed (known locally): {candidate.message}")
            return None
        if self._exists_in_db(candidate.message):
            logger.debug(f"[Notifications] Suppressed (already stored): {candidate.message}")
            return None

        notification = Notification(
            pharmacy_id=self.pharmacy_id,
            type=candidate.type,
            message=candidate.message,
            created_at=datetime.now(timezone.utc),
            is_read=False,
        )
        self.db.add(notification)
        try:
            self.db.commit()
        except IntegrityError:
            # Another scan stored the same message between our check and insert
            self.db.rollback()
            logger.info(f"[Notifications] Suppressed (concurrent insert): {candidate.message}")
            return None
        self.db.refresh(notification)

        record = NotificationRecord.from_model(notification)
        self.state = with_notification(self.state, record)
        logger.info(f"[Notifications] Emitted #{record.id} ({record.type}) for pharmacy {self.pharmacy_id}")
        return record

    def scan(self, medicines: Iterable = None, today: date = None) -> ScanOutcome:
        """
        Run the condition scanner and pass every candidate through the gate.

        Defaults to the stock snapshot held in the state. A database error on
        one candidate is logged and skipped; the rest of the scan continues.
        """
        medicines = self.state.stock if medicines is None else medicines
        outcome = ScanOutcome()
        for candidate in scan_stock(medicines, today):
            try:
                record = self.emit(candidate)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"[Notifications] Failed to store '{candidate.message}': {e}")
                outcome.failed += 1
                continue
            if record is None:
                outcome.suppressed += 1
            else:
                outcome.emitted.append(record)
        return outcome

    def mark_all_read(self) -> int:
        """
        Flip every unread notification of the pharmacy to read in one batch.

        All-or-nothing: on failure the transaction is rolled back, the local
        store is left untouched and the error propagates to the caller.
        """
        try:
            updated = (
                self.db.query(Notification)
                .filter(Notification.pharmacy_id == self.pharmacy_id, Notification.is_read.is_(False))
                .update({Notification.is_read: True}, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Notifications] Mark-all-read failed for pharmacy {self.pharmacy_id}: {e}")
            raise

        self.state = with_all_read(self.state)
        logger.info(f"[Notifications] Marked {updated} notifications read for pharmacy {self.pharmacy_id}")
        return updated
