"""
Dashboard overview: profile, stock counters and notifications in one call.

Loading the dashboard also runs the stock scan, so opening it refreshes alerts.
"""
from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends

from mediserve.api.deps import get_notification_center
from mediserve.core.config import settings
from mediserve.schemas.dashboard import DashboardResponse, StockSummary
from mediserve.services.condition_scanner import days_until_expiry
from mediserve.services.notification_service import NotificationCenter

router = APIRouter()


def summarize_stock(stock, today: date = None, window_days: int = None) -> StockSummary:
    today = today or date.today()
    window_days = settings.EXPIRY_WINDOW_DAYS if window_days is None else window_days
    return StockSummary(
        total_medicines=len(stock),
        low_stock=sum(1 for m in stock if 0 < m.quantity < m.low_stock_threshold),
        out_of_stock=sum(1 for m in stock if m.quantity == 0),
        expiring_soon=sum(1 for m in stock if days_until_expiry(m.expiry_date, today) <= window_days),
    )


@router.get("", response_model=DashboardResponse)
def get_dashboard(center: NotificationCenter = Depends(get_notification_center)):
    center.scan()
    state = center.state
    return DashboardResponse(
        profile=asdict(state.profile),
        stock=summarize_stock(state.stock),
        notifications=[n.as_dict() for n in state.notifications.sorted_by_recency()],
        unread_count=state.unread_count,
    )
