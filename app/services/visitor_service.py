from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Dict, List
import logging

from app import models
from app.core.exceptions import NotFoundError
from app.core.monitoring import metrics
from app.schemas import visitor as visitor_schemas
from app.schemas.common import Page, PageParams, project, project_many
from app.services import filters
from app.services.pagination import paginate
from app.services.updates import apply_changes, changes

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = (
    models.Visitor.traffic_source,
    models.Visitor.country,
    models.Visitor.device,
    models.Visitor.browser,
)

class VisitorService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, visitor_id: str) -> models.Visitor:
        visitor = self.db.query(models.Visitor).filter(models.Visitor.id == visitor_id).first()
        if not visitor:
            raise NotFoundError(f"Visitor with ID {visitor_id} not found")
        return visitor

    def create(self, visitor_in: visitor_schemas.VisitorCreate) -> visitor_schemas.Visitor:
        visitor = models.Visitor(**visitor_in.model_dump())
        self.db.add(visitor)
        self.db.commit()
        self.db.refresh(visitor)
        metrics.increment("visitors.created", tags={"device": visitor.device})
        return project(visitor_schemas.Visitor, visitor)

    def list(self, filter_in: visitor_schemas.VisitorFilter, params: PageParams) -> Page[visitor_schemas.Visitor]:
        where = filters.compose(
            filters.any_contains(SEARCH_COLUMNS, filter_in.search),
            filters.contains(models.Visitor.country, filter_in.country),
            filters.contains(models.Visitor.device, filter_in.device),
            filters.contains(models.Visitor.browser, filter_in.browser),
            filters.contains(models.Visitor.traffic_source, filter_in.traffic_source),
            filters.date_range(
                filters.timestamp_column(models.Visitor, filter_in.filter_by_updated),
                filter_in.date_from,
                filter_in.date_to,
            ),
        )
        query = self.db.query(models.Visitor).filter(where)
        return paginate(query, params, visitor_schemas.Visitor, order_by=models.Visitor.created_at.desc())

    def get(self, visitor_id: str) -> visitor_schemas.Visitor:
        return project(visitor_schemas.Visitor, self._get(visitor_id))

    def update(self, visitor_id: str, visitor_in: visitor_schemas.VisitorUpdate) -> visitor_schemas.Visitor:
        visitor = self._get(visitor_id)
        apply_changes(visitor, changes(visitor_in, models.Visitor))
        self.db.commit()
        self.db.refresh(visitor)
        return project(visitor_schemas.Visitor, visitor)

    def delete(self, visitor_id: str) -> visitor_schemas.Visitor:
        visitor = self._get(visitor_id)
        deleted = project(visitor_schemas.Visitor, visitor)
        self.db.delete(visitor)
        self.db.commit()
        return deleted

    def _search(self, column, value: str) -> List[visitor_schemas.Visitor]:
        visitors = self.db.query(models.Visitor).filter(
            filters.compose(filters.contains(column, value))
        ).order_by(models.Visitor.created_at.desc()).all()
        return project_many(visitor_schemas.Visitor, visitors)

    def find_by_country(self, country: str) -> List[visitor_schemas.Visitor]:
        return self._search(models.Visitor.country, country)

    def find_by_traffic_source(self, traffic_source: str) -> List[visitor_schemas.Visitor]:
        return self._search(models.Visitor.traffic_source, traffic_source)

    @metrics.timing("visitors.stats")
    def stats_by(self, column) -> Dict[str, int]:
        """Visitor count per distinct value of ``column``, largest first"""
        counted = func.count(models.Visitor.id)
        rows = self.db.query(column, counted).group_by(column).order_by(counted.desc()).all()
        return {value: count for value, count in rows}

    def stats_by_country(self) -> Dict[str, int]:
        return self.stats_by(models.Visitor.country)

    def stats_by_device(self) -> Dict[str, int]:
        return self.stats_by(models.Visitor.device)

    def stats_by_browser(self) -> Dict[str, int]:
        return self.stats_by(models.Visitor.browser)
