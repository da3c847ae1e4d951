from typing import Any, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.models import PaymentStatus
from app.schemas import Message, Page, PageParams
from app.schemas import payment as payment_schemas
from app.schemas.common import DateRangeFilter
from app.services.payment_service import PaymentService

router = APIRouter()

@router.post("", response_model=payment_schemas.Payment, status_code=201)
def create_payment(
    *,
    db: Session = Depends(deps.get_db),
    payment_in: payment_schemas.PaymentCreate,
) -> Any:
    """Create payment, redeeming its promo code if any"""
    return PaymentService(db).create(payment_in)

@router.get("", response_model=Page[payment_schemas.Payment])
def list_payments(
    db: Session = Depends(deps.get_db),
    search: Optional[str] = None,
    status: Optional[PaymentStatus] = None,
    dates: DateRangeFilter = Depends(deps.date_filter),
    params: PageParams = Depends(deps.pagination("payments")),
) -> Any:
    """List payments, newest first"""
    filter_in = payment_schemas.PaymentFilter(search=search, status=status, **dates.model_dump())
    return PaymentService(db).list(filter_in, params)

@router.get("/stats", response_model=payment_schemas.PaymentStats)
def payment_stats(
    db: Session = Depends(deps.get_db),
    dates: DateRangeFilter = Depends(deps.date_filter),
) -> Any:
    """Pending and completed counts plus completed amount"""
    return PaymentService(db).stats(dates.date_from, dates.date_to)

@router.get("/by-email/{email}", response_model=Page[payment_schemas.Payment])
def payments_by_email(
    email: str,
    db: Session = Depends(deps.get_db),
    params: PageParams = Depends(deps.pagination("payments")),
) -> Any:
    """List payments made with an email"""
    return PaymentService(db).list(payment_schemas.PaymentFilter(email=email), params)

@router.get("/{payment_id}", response_model=payment_schemas.Payment)
def read_payment(
    payment_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Get payment by ID"""
    return PaymentService(db).get(payment_id)

@router.patch("/{payment_id}", response_model=payment_schemas.Payment)
def update_payment(
    *,
    payment_id: int,
    db: Session = Depends(deps.get_db),
    payment_in: payment_schemas.PaymentUpdate,
) -> Any:
    """Update payment"""
    return PaymentService(db).update(payment_id, payment_in)

@router.delete("/{payment_id}", response_model=Message)
def delete_payment(
    payment_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Delete payment"""
    return PaymentService(db).delete(payment_id)
