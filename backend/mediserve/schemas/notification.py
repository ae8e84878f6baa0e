from pydantic import BaseModel
from datetime import datetime


class NotificationResponse(BaseModel):
    id: int
    type: str
    message: str
    date: datetime
    is_read: bool


class UnreadCount(BaseModel):
    unread_count: int


class ScanResult(BaseModel):
    """Outcome of one stock scan: what was emitted and how much was suppressed."""
    emitted: list[NotificationResponse]
    suppressed: int
    unread_count: int
