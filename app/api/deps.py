from datetime import datetime
from typing import Callable, Generator, Optional
from fastapi import Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import SessionLocal
from app.schemas.common import DateRangeFilter, PageParams
from app.services.pagination import page_params

def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_session_factory() -> Callable[[], Session]:
    """Session factory for work that outlives the request (background tasks)"""
    return SessionLocal

def date_filter(
    date_from: Optional[datetime] = Query(None, alias="dateFrom"),
    date_to: Optional[datetime] = Query(None, alias="dateTo"),
    filter_by_updated: bool = Query(False, alias="filterByUpdated"),
) -> DateRangeFilter:
    return DateRangeFilter(date_from=date_from, date_to=date_to, filter_by_updated=filter_by_updated)

def pagination(resource: str) -> Callable[..., PageParams]:
    """Build a dependency reading page/pageSize (or limit) with the resource's default size"""
    def dependency(
        page: Optional[int] = Query(None, ge=1),
        page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=settings.MAX_PAGE_SIZE),
        limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    ) -> PageParams:
        return page_params(resource, page, page_size or limit)
    return dependency
