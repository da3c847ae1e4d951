from typing import Optional
from pydantic import EmailStr, Field
from app.models import RequestStatus
from app.schemas.common import CamelModel, DateRangeFilter, UtcDateTime

class RequestBase(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)
    email: EmailStr
    telegram: Optional[str] = Field(None, max_length=50)
    partner_code: Optional[str] = Field(None, max_length=50)
    source: str = Field(..., min_length=1, max_length=100)

class RequestCreate(RequestBase):
    status: RequestStatus = RequestStatus.PENDING

class RequestUpdate(CamelModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    email: Optional[EmailStr] = None
    telegram: Optional[str] = Field(None, max_length=50)
    partner_code: Optional[str] = Field(None, max_length=50)
    source: Optional[str] = Field(None, min_length=1, max_length=100)
    # Any value is accepted, no transition table is enforced
    status: Optional[RequestStatus] = None

class RequestFilter(DateRangeFilter):
    search: Optional[str] = None
    status: Optional[RequestStatus] = None
    source: Optional[str] = None

class Request(CamelModel):
    id: int
    full_name: str
    phone: str
    email: str
    telegram: Optional[str] = None
    partner_code: Optional[str] = None
    source: str
    status: RequestStatus
    created_at: UtcDateTime
    updated_at: UtcDateTime
