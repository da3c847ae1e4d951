from typing import Optional
from pydantic import Field
from app.schemas.common import CamelModel, DateRangeFilter, UtcDateTime

class VisitorBase(CamelModel):
    traffic_source: str = Field(..., min_length=1, max_length=200)
    utm_tags: Optional[str] = Field(None, max_length=500)
    country: str = Field(..., min_length=1, max_length=100)
    device: str = Field(..., min_length=1, max_length=50)
    browser: str = Field(..., min_length=1, max_length=100)
    pages_viewed: int = Field(1, ge=1)
    time_on_site: str = Field(..., min_length=1, max_length=20)
    cookie_file: str = Field(..., min_length=1, max_length=200)

class VisitorCreate(VisitorBase):
    pass

class VisitorUpdate(CamelModel):
    traffic_source: Optional[str] = Field(None, min_length=1, max_length=200)
    utm_tags: Optional[str] = Field(None, max_length=500)
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    device: Optional[str] = Field(None, min_length=1, max_length=50)
    browser: Optional[str] = Field(None, min_length=1, max_length=100)
    pages_viewed: Optional[int] = Field(None, ge=1)
    time_on_site: Optional[str] = Field(None, min_length=1, max_length=20)
    cookie_file: Optional[str] = Field(None, min_length=1, max_length=200)

class VisitorFilter(DateRangeFilter):
    search: Optional[str] = None
    country: Optional[str] = None
    device: Optional[str] = None
    browser: Optional[str] = None
    traffic_source: Optional[str] = None

class Visitor(CamelModel):
    id: str
    traffic_source: str
    utm_tags: Optional[str] = None
    country: str
    device: str
    browser: str
    pages_viewed: int
    time_on_site: str
    cookie_file: str
    created_at: UtcDateTime
    updated_at: UtcDateTime
