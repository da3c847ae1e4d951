from typing import Any, List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.schemas import Page, PageParams
from app.schemas import notification as notification_schemas
from app.schemas.common import DateRangeFilter
from app.services.notification_service import NotificationService

router = APIRouter()

@router.post("", response_model=notification_schemas.Notification, status_code=201)
def create_notification(
    *,
    db: Session = Depends(deps.get_db),
    notification_in: notification_schemas.NotificationCreate,
) -> Any:
    """Create notification"""
    return NotificationService(db).create(notification_in)

@router.get("", response_model=Page[notification_schemas.Notification])
def list_notifications(
    db: Session = Depends(deps.get_db),
    search: Optional[str] = None,
    dates: DateRangeFilter = Depends(deps.date_filter),
    params: PageParams = Depends(deps.pagination("notifications")),
) -> Any:
    """List notifications, newest first"""
    filter_in = notification_schemas.NotificationFilter(search=search, **dates.model_dump())
    return NotificationService(db).list(filter_in, params)

@router.get("/active", response_model=List[notification_schemas.Notification])
def active_notifications(
    db: Session = Depends(deps.get_db),
) -> Any:
    """Notifications that have not ended yet"""
    return NotificationService(db).list_active()

@router.get("/{notification_id}", response_model=notification_schemas.Notification)
def read_notification(
    notification_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Get notification by ID"""
    return NotificationService(db).get(notification_id)

@router.patch("/{notification_id}", response_model=notification_schemas.Notification)
def update_notification(
    *,
    notification_id: int,
    db: Session = Depends(deps.get_db),
    notification_in: notification_schemas.NotificationUpdate,
) -> Any:
    """Update notification"""
    return NotificationService(db).update(notification_id, notification_in)

@router.delete("/{notification_id}", response_model=notification_schemas.Notification)
def delete_notification(
    notification_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Delete notification, returning the deleted record"""
    return NotificationService(db).delete(notification_id)
