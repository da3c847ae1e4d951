from typing import Optional
from pydantic import BaseModel, Field
from app.schemas.common import CamelModel, UtcDateTime

class PromoCodeBase(CamelModel):
    code: str = Field(..., min_length=1, max_length=50)
    discount_percent: Optional[int] = Field(None, ge=0, le=100)
    discount_amount: Optional[int] = Field(None, ge=0)
    is_active: bool = True
    usage_limit: Optional[int] = Field(None, ge=1)
    expires_at: Optional[UtcDateTime] = None

class PromoCodeCreate(PromoCodeBase):
    pass

class PromoCodeUpdate(CamelModel):
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    discount_percent: Optional[int] = Field(None, ge=0, le=100)
    discount_amount: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    usage_limit: Optional[int] = Field(None, ge=1)
    expires_at: Optional[UtcDateTime] = None

class PromoCode(CamelModel):
    id: int
    code: str
    discount_percent: Optional[int] = None
    discount_amount: Optional[int] = None
    is_active: bool
    usage_limit: Optional[int] = None
    usage_count: int
    expires_at: Optional[UtcDateTime] = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

class PromoCodeInfo(CamelModel):
    """Promo code as embedded in a payment"""
    id: int
    code: str
    discount_percent: Optional[int] = None
    discount_amount: Optional[int] = None

class PromoCodeValidation(BaseModel):
    isValid: bool
