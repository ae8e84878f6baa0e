from pydantic import BaseModel

from mediserve.schemas.pharmacy import ProfileResponse
from mediserve.schemas.notification import NotificationResponse


class StockSummary(BaseModel):
    total_medicines: int
    low_stock: int
    out_of_stock: int
    expiring_soon: int


class DashboardResponse(BaseModel):
    profile: ProfileResponse
    stock: StockSummary
    notifications: list[NotificationResponse]
    unread_count: int
