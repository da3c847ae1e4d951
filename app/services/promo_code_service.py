from datetime import datetime
from sqlalchemy.orm import Session
from typing import Optional
import logging

from app import models
from app.core.exceptions import NotFoundError
from app.core.monitoring import metrics
from app.schemas import promo_code as promo_schemas
from app.schemas.common import Message, Page, PageParams, project
from app.services import filters
from app.services.pagination import paginate
from app.services.uniqueness import commit_unique, ensure_unique
from app.services.updates import apply_changes, changes

logger = logging.getLogger(__name__)


def is_promo_code_valid(promo_code: Optional[models.PromoCode], now: Optional[datetime] = None) -> bool:
    """A promo code is usable when it exists, is active, has not expired and has uses left"""
    if promo_code is None or not promo_code.is_active:
        return False
    now = now or models.utcnow()
    if promo_code.expires_at is not None and promo_code.expires_at < now:
        return False
    if promo_code.usage_limit is not None and promo_code.usage_count >= promo_code.usage_limit:
        return False
    return True


class PromoCodeService:
    def __init__(self, db: Session):
        self.db = db

    def get_model(self, promo_code_id: int) -> models.PromoCode:
        promo_code = self.db.query(models.PromoCode).filter(models.PromoCode.id == promo_code_id).first()
        if not promo_code:
            raise NotFoundError(f"Promo code with ID {promo_code_id} not found")
        return promo_code

    def create(self, promo_in: promo_schemas.PromoCodeCreate) -> promo_schemas.PromoCode:
        candidates = {"code": promo_in.code}
        ensure_unique(self.db, models.PromoCode, candidates, entity="Promo code")

        promo_code = models.PromoCode(**promo_in.model_dump())
        self.db.add(promo_code)
        commit_unique(self.db, models.PromoCode, candidates, entity="Promo code")
        self.db.refresh(promo_code)

        metrics.increment("promo_codes.created")
        return project(promo_schemas.PromoCode, promo_code)

    def list(self, params: PageParams, is_active: Optional[bool] = None) -> Page[promo_schemas.PromoCode]:
        query = self.db.query(models.PromoCode).filter(
            filters.compose(filters.equals(models.PromoCode.is_active, is_active))
        )
        return paginate(query, params, promo_schemas.PromoCode, order_by=models.PromoCode.created_at.desc())

    def get(self, promo_code_id: int) -> promo_schemas.PromoCode:
        return project(promo_schemas.PromoCode, self.get_model(promo_code_id))

    def get_by_code(self, code: str) -> promo_schemas.PromoCode:
        promo_code = self.db.query(models.PromoCode).filter(models.PromoCode.code == code).first()
        if not promo_code:
            raise NotFoundError(f'Promo code "{code}" not found')
        return project(promo_schemas.PromoCode, promo_code)

    def update(self, promo_code_id: int, promo_in: promo_schemas.PromoCodeUpdate) -> promo_schemas.PromoCode:
        promo_code = self.get_model(promo_code_id)
        update_data = changes(promo_in, models.PromoCode)

        candidates = {"code": update_data.get("code")}
        ensure_unique(self.db, models.PromoCode, candidates, entity="Promo code", exclude_id=promo_code_id)

        apply_changes(promo_code, update_data)
        commit_unique(self.db, models.PromoCode, candidates, entity="Promo code", exclude_id=promo_code_id)
        self.db.refresh(promo_code)
        return project(promo_schemas.PromoCode, promo_code)

    def delete(self, promo_code_id: int) -> Message:
        promo_code = self.get_model(promo_code_id)
        self.db.delete(promo_code)
        self.db.commit()
        return Message(message="Promo code deleted successfully")

    def validate(self, code: str) -> bool:
        promo_code = self.db.query(models.PromoCode).filter(models.PromoCode.code == code).first()
        return is_promo_code_valid(promo_code)

    def increment_usage(self, promo_code_id: int) -> None:
        """Atomically bump the usage counter; only call after a successful redemption"""
        updated = self.db.query(models.PromoCode).filter(
            models.PromoCode.id == promo_code_id
        ).update(
            {models.PromoCode.usage_count: models.PromoCode.usage_count + 1},
            synchronize_session=False,
        )
        if not updated:
            self.db.rollback()
            raise NotFoundError(f"Promo code with ID {promo_code_id} not found")
        self.db.commit()
        metrics.increment("promo_codes.redeemed")
