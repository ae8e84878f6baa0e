"""
Notification: one alert shown in the dashboard bell and the notifications page.

Rows are never deleted; the only mutation is is_read False -> True.
(pharmacy_id, message) is unique: the same alert text is emitted once per pharmacy.
"""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from mediserve.db.base import Base


class NotificationType:
    """Allowed notification types"""
    LOW_STOCK = "low-stock"
    EXPIRY = "expiry"
    NEW_PRESCRIPTION = "new-prescription"

    ALL = (LOW_STOCK, EXPIRY, NEW_PRESCRIPTION)


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        UniqueConstraint("pharmacy_id", "message", name="uq_notification_pharmacy_message"),
    )

    id = Column(Integer, primary_key=True, index=True)
    pharmacy_id = Column(Integer, ForeignKey("pharmacies.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(32), nullable=False)
    message = Column(String(512), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)

    pharmacy = relationship("Pharmacy", backref="notifications")

    def __repr__(self):
        return f"<Notification id={self.id} type={self.type} read={self.is_read}>"
