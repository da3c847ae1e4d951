from typing import Any, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.schemas import Page, PageParams
from app.schemas import partner as partner_schemas
from app.schemas.common import DateRangeFilter
from app.services.partner_service import PartnerService

router = APIRouter()

@router.post("", response_model=partner_schemas.Partner, status_code=201)
def create_partner(
    *,
    db: Session = Depends(deps.get_db),
    partner_in: partner_schemas.PartnerCreate,
) -> Any:
    """Create partner"""
    return PartnerService(db).create(partner_in)

@router.get("", response_model=Page[partner_schemas.Partner])
def list_partners(
    db: Session = Depends(deps.get_db),
    search: Optional[str] = None,
    dates: DateRangeFilter = Depends(deps.date_filter),
    params: PageParams = Depends(deps.pagination("partners")),
) -> Any:
    """List partners, newest first"""
    filter_in = partner_schemas.PartnerFilter(search=search, **dates.model_dump())
    return PartnerService(db).list(filter_in, params)

@router.get("/search/by-code", response_model=Optional[partner_schemas.Partner])
def find_partner_by_code(
    db: Session = Depends(deps.get_db),
    code: str = Query(..., min_length=1),
) -> Any:
    """Get partner by referral code, or null"""
    return PartnerService(db).find_by_code(code)

@router.get("/search/by-username", response_model=Optional[partner_schemas.Partner])
def find_partner_by_username(
    db: Session = Depends(deps.get_db),
    username: str = Query(..., min_length=1),
) -> Any:
    """Get partner by username, or null"""
    return PartnerService(db).find_by_username(username)

@router.get("/{partner_id}", response_model=partner_schemas.Partner)
def read_partner(
    partner_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Get partner by ID"""
    return PartnerService(db).get(partner_id)

@router.patch("/{partner_id}", response_model=partner_schemas.Partner)
def update_partner(
    *,
    partner_id: int,
    db: Session = Depends(deps.get_db),
    partner_in: partner_schemas.PartnerUpdate,
) -> Any:
    """Update partner"""
    return PartnerService(db).update(partner_id, partner_in)

@router.delete("/{partner_id}", response_model=partner_schemas.Partner)
def delete_partner(
    partner_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Delete partner, returning the deleted record"""
    return PartnerService(db).delete(partner_id)
