"""Initialize database with sample data"""
from datetime import timedelta
from sqlalchemy.orm import Session
from app.db.session import SessionLocal, engine
from app.db.base import Base
from app.models import (
    Notification, Partner, PartnerBonusStatus, PromoCode, RequisiteType, utcnow
)
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def init_db(db: Session) -> None:
    """Initialize database with base data"""

    # Create tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")

    # Check if data already exists
    if db.query(Partner).first():
        logger.info("Database already initialized")
        return

    db.add(Partner(
        name="Demo Partner",
        username="demo_partner",
        code="DEMO2024",
        requisites="4276 0000 0000 0000",
        requisite_type=RequisiteType.Card,
        bonus_status=PartnerBonusStatus.NONE,
    ))

    db.add(PromoCode(
        code="WELCOME10",
        discount_percent=10,
        is_active=True,
        usage_limit=100,
        usage_count=0,
        expires_at=utcnow() + timedelta(days=90),
    ))

    db.add(Notification(
        text="Welcome to the MTrade admin panel",
        end=utcnow() + timedelta(days=7),
    ))

    db.commit()
    logger.info("Database initialized with sample data")

if __name__ == "__main__":
    db = SessionLocal()
    try:
        init_db(db)
    finally:
        db.close()
