"""Notifications page and header bell: list, unread count, mark all read."""
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from mediserve.api.deps import get_notification_center
from mediserve.core.exceptions import BusinessError
from mediserve.schemas.notification import NotificationResponse, UnreadCount
from mediserve.services.notification_service import NotificationCenter

router = APIRouter()


@router.get("", response_model=list[NotificationResponse])
def list_notifications(center: NotificationCenter = Depends(get_notification_center)):
    """Newest first."""
    return [n.as_dict() for n in center.state.notifications.sorted_by_recency()]


@router.get("/unread-count", response_model=UnreadCount)
def unread_count(center: NotificationCenter = Depends(get_notification_center)):
    return UnreadCount(unread_count=center.state.unread_count)


@router.post("/mark-all-read", response_model=UnreadCount)
def mark_all_read(center: NotificationCenter = Depends(get_notification_center)):
    try:
        center.mark_all_read()
    except SQLAlchemyError as e:
        raise BusinessError.server_error(e, detail="Could not mark notifications as read. Please try again.")
    return UnreadCount(unread_count=center.state.unread_count)
