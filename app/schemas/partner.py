from typing import Optional
from pydantic import Field
from app.models import RequisiteType, PartnerBonusStatus
from app.schemas.common import CamelModel, DateRangeFilter, UtcDateTime

class PartnerBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=50)
    requisites: str = Field(..., min_length=1, max_length=500)
    requisite_type: RequisiteType
    bonus_status: PartnerBonusStatus = PartnerBonusStatus.NONE
    code: str = Field(..., min_length=1, max_length=50)

class PartnerCreate(PartnerBase):
    pass

class PartnerUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    username: Optional[str] = Field(None, min_length=1, max_length=50)
    requisites: Optional[str] = Field(None, min_length=1, max_length=500)
    requisite_type: Optional[RequisiteType] = None
    bonus_status: Optional[PartnerBonusStatus] = None
    code: Optional[str] = Field(None, min_length=1, max_length=50)

class PartnerFilter(DateRangeFilter):
    search: Optional[str] = None

# Output projection: stored values pass through without input constraints
class Partner(CamelModel):
    id: int
    name: str
    username: str
    requisites: str
    requisite_type: RequisiteType
    bonus_status: PartnerBonusStatus
    code: str
    created_at: UtcDateTime
