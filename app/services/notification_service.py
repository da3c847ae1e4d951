from sqlalchemy.orm import Session
from typing import List
import logging

from app import models
from app.core.exceptions import NotFoundError
from app.schemas import notification as notification_schemas
from app.schemas.common import Page, PageParams, project, project_many
from app.services import filters
from app.services.pagination import paginate
from app.services.updates import apply_changes, changes

logger = logging.getLogger(__name__)

class NotificationService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, notification_id: int) -> models.Notification:
        notification = self.db.query(models.Notification).filter(
            models.Notification.id == notification_id
        ).first()
        if not notification:
            raise NotFoundError(f"Notification with ID {notification_id} not found")
        return notification

    def create(self, notification_in: notification_schemas.NotificationCreate) -> notification_schemas.Notification:
        notification = models.Notification(**notification_in.model_dump())
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return project(notification_schemas.Notification, notification)

    def list(
        self, filter_in: notification_schemas.NotificationFilter, params: PageParams
    ) -> Page[notification_schemas.Notification]:
        where = filters.compose(
            filters.contains(models.Notification.text, filter_in.search),
            filters.date_range(models.Notification.created_at, filter_in.date_from, filter_in.date_to),
        )
        query = self.db.query(models.Notification).filter(where)
        return paginate(
            query, params, notification_schemas.Notification, order_by=models.Notification.created_at.desc()
        )

    def list_active(self) -> List[notification_schemas.Notification]:
        notifications = self.db.query(models.Notification).filter(
            models.Notification.end > models.utcnow()
        ).order_by(models.Notification.created_at.desc()).all()
        return project_many(notification_schemas.Notification, notifications)

    def get(self, notification_id: int) -> notification_schemas.Notification:
        return project(notification_schemas.Notification, self._get(notification_id))

    def update(
        self, notification_id: int, notification_in: notification_schemas.NotificationUpdate
    ) -> notification_schemas.Notification:
        notification = self._get(notification_id)
        apply_changes(notification, changes(notification_in, models.Notification))
        self.db.commit()
        self.db.refresh(notification)
        return project(notification_schemas.Notification, notification)

    def delete(self, notification_id: int) -> notification_schemas.Notification:
        notification = self._get(notification_id)
        deleted = project(notification_schemas.Notification, notification)
        self.db.delete(notification)
        self.db.commit()
        return deleted
