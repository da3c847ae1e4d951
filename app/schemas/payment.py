from typing import Optional
from pydantic import EmailStr, Field
from app.models import PaymentStatus
from app.schemas.common import CamelModel, DateRangeFilter, UtcDateTime
from app.schemas.promo_code import PromoCodeInfo

class PaymentBase(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    source: str = Field(..., min_length=1, max_length=100)
    product: str = Field(..., min_length=1, max_length=100)
    amount: int = Field(..., ge=1)
    promo_code_id: Optional[int] = None

class PaymentCreate(PaymentBase):
    status: PaymentStatus = PaymentStatus.PENDING

class PaymentUpdate(CamelModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    source: Optional[str] = Field(None, min_length=1, max_length=100)
    product: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[int] = Field(None, ge=1)
    promo_code_id: Optional[int] = None
    status: Optional[PaymentStatus] = None

class PaymentFilter(DateRangeFilter):
    search: Optional[str] = None
    status: Optional[PaymentStatus] = None
    email: Optional[str] = None

class Payment(CamelModel):
    id: int
    full_name: str
    email: str
    source: str
    product: str
    amount: int
    promo_code_id: Optional[int] = None
    status: PaymentStatus
    promo_code: Optional[PromoCodeInfo] = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

class PaymentStats(CamelModel):
    pending: int
    completed: int
    total_amount: int
