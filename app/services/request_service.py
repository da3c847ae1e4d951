from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Dict, List
import logging

from app import models
from app.core.exceptions import NotFoundError
from app.core.monitoring import metrics
from app.schemas import request as request_schemas
from app.schemas.common import Page, PageParams, project, project_many
from app.services import filters
from app.services.pagination import paginate
from app.services.updates import apply_changes, changes

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = (
    models.Request.full_name,
    models.Request.email,
    models.Request.phone,
    models.Request.telegram,
)

class RequestService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, request_id: int) -> models.Request:
        request = self.db.query(models.Request).filter(models.Request.id == request_id).first()
        if not request:
            raise NotFoundError(f"Request with ID {request_id} not found")
        return request

    def create(self, request_in: request_schemas.RequestCreate) -> request_schemas.Request:
        """Store the request; partner bonus propagation is dispatched by the caller"""
        request = models.Request(**request_in.model_dump())
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)

        metrics.increment("requests.created", tags={"source": request.source})
        return project(request_schemas.Request, request)

    def list(self, filter_in: request_schemas.RequestFilter, params: PageParams) -> Page[request_schemas.Request]:
        where = filters.compose(
            filters.any_contains(SEARCH_COLUMNS, filter_in.search),
            filters.equals(models.Request.status, filter_in.status),
            filters.contains(models.Request.source, filter_in.source),
            filters.date_range(
                filters.timestamp_column(models.Request, filter_in.filter_by_updated),
                filter_in.date_from,
                filter_in.date_to,
            ),
        )
        query = self.db.query(models.Request).filter(where)
        return paginate(query, params, request_schemas.Request, order_by=models.Request.created_at.desc())

    def get(self, request_id: int) -> request_schemas.Request:
        return project(request_schemas.Request, self._get(request_id))

    def update(self, request_id: int, request_in: request_schemas.RequestUpdate) -> request_schemas.Request:
        request = self._get(request_id)
        update_data = changes(request_in, models.Request)

        old_status = request.status
        apply_changes(request, update_data)
        self.db.commit()
        self.db.refresh(request)

        if request.status != old_status:
            logger.info(f"Request {request_id} status changed from {old_status.value} to {request.status.value}")
        return project(request_schemas.Request, request)

    def delete(self, request_id: int) -> request_schemas.Request:
        request = self._get(request_id)
        deleted = project(request_schemas.Request, request)
        self.db.delete(request)
        self.db.commit()
        return deleted

    def find_by_partner_code(self, partner_code: str) -> List[request_schemas.Request]:
        requests = self.db.query(models.Request).filter(
            models.Request.partner_code == partner_code
        ).order_by(models.Request.created_at.desc()).all()
        return project_many(request_schemas.Request, requests)

    @metrics.timing("requests.stats")
    def stats_by_status(self) -> Dict[str, int]:
        rows = self.db.query(
            models.Request.status, func.count(models.Request.id)
        ).group_by(models.Request.status).all()
        return {status.value: count for status, count in rows}
