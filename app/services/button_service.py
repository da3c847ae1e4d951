from datetime import datetime
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app import models
from app.core.exceptions import NotFoundError
from app.core.monitoring import metrics
from app.schemas import button as button_schemas
from app.schemas.common import DateRangeFilter, Page, PageParams, project
from app.services import filters
from app.services.pagination import paginate
from app.services.updates import apply_changes, changes

logger = logging.getLogger(__name__)

# Buttons created by track-click
DEFAULT_BUTTON_TYPE = "action"
TRACKED_BUTTON_DESCRIPTION = "Auto-created button from frontend tracking"

class ButtonService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, button_id: int) -> models.Button:
        button = self.db.query(models.Button).filter(models.Button.id == button_id).first()
        if not button:
            raise NotFoundError(f"Button with ID {button_id} not found")
        return button

    def _increment(self, button_id: int) -> None:
        self.db.query(models.Button).filter(models.Button.id == button_id).update(
            {models.Button.click_count: models.Button.click_count + 1},
            synchronize_session=False,
        )

    def create(self, button_in: button_schemas.ButtonCreate) -> button_schemas.Button:
        button = models.Button(**button_in.model_dump())
        self.db.add(button)
        self.db.commit()
        self.db.refresh(button)
        metrics.increment("buttons.created", tags={"type": button.type})
        return project(button_schemas.Button, button)

    def list(self, filter_in: DateRangeFilter, params: PageParams) -> Page[button_schemas.Button]:
        where = filters.compose(
            filters.date_range(
                filters.timestamp_column(models.Button, filter_in.filter_by_updated),
                filter_in.date_from,
                filter_in.date_to,
            )
        )
        query = self.db.query(models.Button).filter(where)
        return paginate(query, params, button_schemas.Button, order_by=models.Button.created_at.desc())

    def get(self, button_id: int) -> button_schemas.Button:
        return project(button_schemas.Button, self._get(button_id))

    def update(self, button_id: int, button_in: button_schemas.ButtonUpdate) -> button_schemas.Button:
        button = self._get(button_id)
        apply_changes(button, changes(button_in, models.Button))
        self.db.commit()
        self.db.refresh(button)
        return project(button_schemas.Button, button)

    def delete(self, button_id: int) -> None:
        button = self._get(button_id)
        self.db.delete(button)
        self.db.commit()

    def increment_click_count(self, button_id: int) -> button_schemas.Button:
        button = self._get(button_id)
        self._increment(button_id)
        self.db.commit()
        self.db.refresh(button)
        return project(button_schemas.Button, button)

    def track_click(self, click_in: button_schemas.TrackClick) -> button_schemas.Button:
        """Count a click on the button named ``click_in.name``, creating it on first click"""
        button = self.db.query(models.Button).filter(models.Button.name == click_in.name).first()
        if button:
            self._increment(button.id)
        else:
            button = models.Button(
                name=click_in.name,
                type=click_in.type or DEFAULT_BUTTON_TYPE,
                url=click_in.url,
                description=TRACKED_BUTTON_DESCRIPTION,
                is_active=True,
                click_count=1,
            )
            self.db.add(button)
            logger.info(f"Button {click_in.name!r} created on first click")
        self.db.commit()
        self.db.refresh(button)
        metrics.increment("buttons.clicks", tags={"type": button.type})
        return project(button_schemas.Button, button)

    @metrics.timing("buttons.click_stats")
    def click_stats(
        self, date_from: Optional[datetime] = None, date_to: Optional[datetime] = None
    ) -> List[button_schemas.ButtonClickStats]:
        # Clicks bump updated_at, so the period applies to it
        rows = self.db.query(
            models.Button.type,
            func.coalesce(func.sum(models.Button.click_count), 0),
            func.count(models.Button.id),
        ).filter(
            filters.compose(filters.date_range(models.Button.updated_at, date_from, date_to))
        ).group_by(models.Button.type).all()
        return [
            button_schemas.ButtonClickStats(type=type_, total_clicks=total_clicks, button_count=button_count)
            for type_, total_clicks, button_count in rows
        ]
