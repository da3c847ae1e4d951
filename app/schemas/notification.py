from typing import Optional
from pydantic import Field
from app.schemas.common import CamelModel, DateRangeFilter, UtcDateTime

class NotificationBase(CamelModel):
    text: str = Field(..., min_length=1, max_length=1000)
    end: UtcDateTime

class NotificationCreate(NotificationBase):
    pass

class NotificationUpdate(CamelModel):
    text: Optional[str] = Field(None, min_length=1, max_length=1000)
    end: Optional[UtcDateTime] = None

class NotificationFilter(DateRangeFilter):
    search: Optional[str] = None

class Notification(CamelModel):
    id: int
    text: str
    end: UtcDateTime
    created_at: UtcDateTime
