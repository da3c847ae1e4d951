from typing import Any, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.schemas import Message, Page, PageParams
from app.schemas import promo_code as promo_schemas
from app.services.promo_code_service import PromoCodeService

router = APIRouter()

@router.post("", response_model=promo_schemas.PromoCode, status_code=201)
def create_promo_code(
    *,
    db: Session = Depends(deps.get_db),
    promo_in: promo_schemas.PromoCodeCreate,
) -> Any:
    """Create promo code"""
    return PromoCodeService(db).create(promo_in)

@router.get("", response_model=Page[promo_schemas.PromoCode])
def list_promo_codes(
    db: Session = Depends(deps.get_db),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    params: PageParams = Depends(deps.pagination("promo_codes")),
) -> Any:
    """List promo codes, newest first"""
    return PromoCodeService(db).list(params, is_active=is_active)

@router.get("/code/{code}", response_model=promo_schemas.PromoCode)
def read_promo_code_by_code(
    code: str,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Get promo code by its code"""
    return PromoCodeService(db).get_by_code(code)

@router.post("/validate/{code}", response_model=promo_schemas.PromoCodeValidation)
def validate_promo_code(
    code: str,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Check whether a code can be redeemed now"""
    return promo_schemas.PromoCodeValidation(isValid=PromoCodeService(db).validate(code))

@router.get("/{promo_code_id}", response_model=promo_schemas.PromoCode)
def read_promo_code(
    promo_code_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Get promo code by ID"""
    return PromoCodeService(db).get(promo_code_id)

@router.patch("/{promo_code_id}", response_model=promo_schemas.PromoCode)
def update_promo_code(
    *,
    promo_code_id: int,
    db: Session = Depends(deps.get_db),
    promo_in: promo_schemas.PromoCodeUpdate,
) -> Any:
    """Update promo code"""
    return PromoCodeService(db).update(promo_code_id, promo_in)

@router.delete("/{promo_code_id}", response_model=Message)
def delete_promo_code(
    promo_code_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Delete promo code"""
    return PromoCodeService(db).delete(promo_code_id)
