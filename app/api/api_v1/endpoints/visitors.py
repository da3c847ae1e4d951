from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.schemas import Page, PageParams
from app.schemas import visitor as visitor_schemas
from app.schemas.common import DateRangeFilter
from app.services.visitor_service import VisitorService

router = APIRouter()

@router.post("", response_model=visitor_schemas.Visitor, status_code=201)
def create_visitor(
    *,
    db: Session = Depends(deps.get_db),
    visitor_in: visitor_schemas.VisitorCreate,
) -> Any:
    """Record visitor"""
    return VisitorService(db).create(visitor_in)

@router.get("", response_model=Page[visitor_schemas.Visitor])
def list_visitors(
    db: Session = Depends(deps.get_db),
    search: Optional[str] = None,
    country: Optional[str] = None,
    device: Optional[str] = None,
    browser: Optional[str] = None,
    traffic_source: Optional[str] = Query(None, alias="trafficSource"),
    dates: DateRangeFilter = Depends(deps.date_filter),
    params: PageParams = Depends(deps.pagination("visitors")),
) -> Any:
    """List visitors, newest first"""
    filter_in = visitor_schemas.VisitorFilter(
        search=search,
        country=country,
        device=device,
        browser=browser,
        traffic_source=traffic_source,
        **dates.model_dump(),
    )
    return VisitorService(db).list(filter_in, params)

@router.get("/stats/country", response_model=Dict[str, int])
def visitors_by_country(db: Session = Depends(deps.get_db)) -> Any:
    """Visitor count per country, largest first"""
    return VisitorService(db).stats_by_country()

@router.get("/stats/device", response_model=Dict[str, int])
def visitors_by_device(db: Session = Depends(deps.get_db)) -> Any:
    """Visitor count per device, largest first"""
    return VisitorService(db).stats_by_device()

@router.get("/stats/browser", response_model=Dict[str, int])
def visitors_by_browser(db: Session = Depends(deps.get_db)) -> Any:
    """Visitor count per browser, largest first"""
    return VisitorService(db).stats_by_browser()

@router.get("/search/country/{country}", response_model=List[visitor_schemas.Visitor])
def search_visitors_by_country(
    country: str,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Visitors whose country contains the given text"""
    return VisitorService(db).find_by_country(country)

@router.get("/search/traffic-source/{traffic_source}", response_model=List[visitor_schemas.Visitor])
def search_visitors_by_traffic_source(
    traffic_source: str,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Visitors whose traffic source contains the given text"""
    return VisitorService(db).find_by_traffic_source(traffic_source)

@router.get("/{visitor_id}", response_model=visitor_schemas.Visitor)
def read_visitor(
    visitor_id: str,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Get visitor by ID"""
    return VisitorService(db).get(visitor_id)

@router.patch("/{visitor_id}", response_model=visitor_schemas.Visitor)
def update_visitor(
    *,
    visitor_id: str,
    db: Session = Depends(deps.get_db),
    visitor_in: visitor_schemas.VisitorUpdate,
) -> Any:
    """Update visitor"""
    return VisitorService(db).update(visitor_id, visitor_in)

@router.delete("/{visitor_id}", response_model=visitor_schemas.Visitor)
def delete_visitor(
    visitor_id: str,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Delete visitor, returning the deleted record"""
    return VisitorService(db).delete(visitor_id)
