from typing import Any, Callable, Dict, List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.models import RequestStatus
from app.schemas import Page, PageParams
from app.schemas import request as request_schemas
from app.schemas.common import DateRangeFilter
from app.services.partner_bonus import mark_partner_bonus_pending
from app.services.request_service import RequestService

router = APIRouter()

@router.post("", response_model=request_schemas.Request, status_code=201)
def create_request(
    *,
    db: Session = Depends(deps.get_db),
    session_factory: Callable[[], Session] = Depends(deps.get_session_factory),
    background_tasks: BackgroundTasks,
    request_in: request_schemas.RequestCreate,
) -> Any:
    """Create request; a referral marks the partner's bonus as pending"""
    request = RequestService(db).create(request_in)
    if request.partner_code:
        background_tasks.add_task(
            mark_partner_bonus_pending, session_factory, request.partner_code, request.id
        )
    return request

@router.get("", response_model=Page[request_schemas.Request])
def list_requests(
    db: Session = Depends(deps.get_db),
    search: Optional[str] = None,
    status: Optional[RequestStatus] = None,
    source: Optional[str] = None,
    dates: DateRangeFilter = Depends(deps.date_filter),
    params: PageParams = Depends(deps.pagination("requests")),
) -> Any:
    """List requests, newest first"""
    filter_in = request_schemas.RequestFilter(
        search=search, status=status, source=source, **dates.model_dump()
    )
    return RequestService(db).list(filter_in, params)

@router.get("/stats", response_model=Dict[str, int])
def request_stats(
    db: Session = Depends(deps.get_db),
) -> Any:
    """Request count per status"""
    return RequestService(db).stats_by_status()

@router.get("/by-partner/{partner_code}", response_model=List[request_schemas.Request])
def requests_by_partner(
    partner_code: str,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Get all requests referred by a partner code"""
    return RequestService(db).find_by_partner_code(partner_code)

@router.get("/{request_id}", response_model=request_schemas.Request)
def read_request(
    request_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Get request by ID"""
    return RequestService(db).get(request_id)

@router.patch("/{request_id}", response_model=request_schemas.Request)
def update_request(
    *,
    request_id: int,
    db: Session = Depends(deps.get_db),
    request_in: request_schemas.RequestUpdate,
) -> Any:
    """Update request"""
    return RequestService(db).update(request_id, request_in)

@router.delete("/{request_id}", response_model=request_schemas.Request)
def delete_request(
    request_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Delete request, returning the deleted record"""
    return RequestService(db).delete(request_id)
