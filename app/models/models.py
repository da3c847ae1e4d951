from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
import uuid

from app.db.base_class import Base


def utcnow() -> datetime:
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_visitor_id() -> str:
    return uuid.uuid4().hex


# Enums shared by storage, input validation and projections
class RequisiteType(str, enum.Enum):
    Card = "Card"
    Yoomoney = "Yoomoney"
    Phone = "Phone"
    Crypto = "Crypto"

class PartnerBonusStatus(str, enum.Enum):
    NONE = "NONE"
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"

class RequestStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    IN_PROGRESS = "IN_PROGRESS"

class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class Partner(Base):
    __tablename__ = "partners"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    username = Column(String(50), nullable=False, unique=True, index=True)
    code = Column(String(50), nullable=False, unique=True, index=True)

    # Payout details
    requisites = Column(String(500), nullable=False)
    requisite_type = Column(Enum(RequisiteType), nullable=False)
    bonus_status = Column(Enum(PartnerBonusStatus), default=PartnerBonusStatus.NONE, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class Request(Base):
    __tablename__ = "requests"

    id = Column(Integer, primary_key=True)

    # Contact Information
    full_name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=False)
    telegram = Column(String(50))

    # Soft reference to Partner.code, no foreign key
    partner_code = Column(String(50), index=True)
    source = Column(String(100), nullable=False)

    status = Column(Enum(RequestStatus), default=RequestStatus.PENDING, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class PromoCode(Base):
    __tablename__ = "promo_codes"

    id = Column(Integer, primary_key=True)
    code = Column(String(50), nullable=False, unique=True, index=True)

    # Discount
    discount_percent = Column(Integer)  # 0-100
    discount_amount = Column(Integer)  # smallest currency unit

    # Validity
    is_active = Column(Boolean, default=True, nullable=False)
    usage_limit = Column(Integer)
    usage_count = Column(Integer, default=0, nullable=False)
    expires_at = Column(DateTime)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    payments = relationship("Payment", back_populates="promo_code")

class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)

    # Payer
    full_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    source = Column(String(100), nullable=False)
    product = Column(String(100), nullable=False)

    amount = Column(Integer, nullable=False)  # smallest currency unit
    promo_code_id = Column(Integer, ForeignKey("promo_codes.id", ondelete="SET NULL"))
    status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    promo_code = relationship("PromoCode", back_populates="payments", lazy="joined")

class Visitor(Base):
    __tablename__ = "visitors"

    id = Column(String(32), primary_key=True, default=new_visitor_id)

    # Tracking attributes
    traffic_source = Column(String(200), nullable=False)
    utm_tags = Column(String(500))
    country = Column(String(100), nullable=False)
    device = Column(String(50), nullable=False)
    browser = Column(String(100), nullable=False)
    pages_viewed = Column(Integer, default=1, nullable=False)
    time_on_site = Column(String(20), nullable=False)
    cookie_file = Column(String(200), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class Button(Base):
    __tablename__ = "buttons"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    url = Column(String(500))
    description = Column(Text)

    is_active = Column(Boolean, default=True, nullable=False)
    click_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    text = Column(Text, nullable=False)
    end = Column(DateTime, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
