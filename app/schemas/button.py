from typing import Annotated, Optional
from pydantic import AfterValidator, AnyHttpUrl, Field, TypeAdapter
from app.schemas.common import CamelModel, UtcDateTime

_http_url = TypeAdapter(AnyHttpUrl)

def validate_http_url(value: str) -> str:
    """Reject anything that is not an http(s) URL, keep the normalized text"""
    return str(_http_url.validate_python(value))

# Validated as a URL, typed and stored as plain text
HttpUrlStr = Annotated[str, Field(max_length=500), AfterValidator(validate_http_url)]

class ButtonBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1, max_length=50)
    url: Optional[HttpUrlStr] = None
    description: Optional[str] = Field(None, max_length=500)
    is_active: bool = True

class ButtonCreate(ButtonBase):
    pass

class ButtonUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    url: Optional[HttpUrlStr] = None
    description: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None

class TrackClick(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: Optional[str] = Field(None, max_length=50)
    url: Optional[str] = Field(None, max_length=500)

class Button(CamelModel):
    id: int
    name: str
    type: str
    url: Optional[str] = None
    description: Optional[str] = None
    is_active: bool
    click_count: int
    created_at: UtcDateTime
    updated_at: UtcDateTime

class ButtonClickStats(CamelModel):
    type: str
    total_clicks: int
    button_count: int
