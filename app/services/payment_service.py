from datetime import datetime
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional
import logging

from app import models
from app.core.exceptions import BusinessRuleError, NotFoundError
from app.core.monitoring import metrics, report_inconsistency
from app.schemas import payment as payment_schemas
from app.schemas.common import Message, Page, PageParams, project
from app.services import filters
from app.services.pagination import paginate
from app.services.promo_code_service import PromoCodeService, is_promo_code_valid
from app.services.updates import apply_changes, changes

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = (
    models.Payment.full_name,
    models.Payment.email,
    models.Payment.product,
    models.Payment.source,
)

class PaymentService:
    def __init__(self, db: Session):
        self.db = db
        self.promo_codes = PromoCodeService(db)

    def _get(self, payment_id: int) -> models.Payment:
        payment = self.db.query(models.Payment).filter(models.Payment.id == payment_id).first()
        if not payment:
            raise NotFoundError(f"Payment with ID {payment_id} not found")
        return payment

    def _check_promo_code(self, promo_code_id: int) -> None:
        promo_code = self.promo_codes.get_model(promo_code_id)
        if not is_promo_code_valid(promo_code):
            raise BusinessRuleError("Promo code is not valid or expired")

    def create(self, payment_in: payment_schemas.PaymentCreate) -> payment_schemas.Payment:
        if payment_in.promo_code_id is not None:
            self._check_promo_code(payment_in.promo_code_id)

        payment = models.Payment(**payment_in.model_dump())
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)
        metrics.increment("payments.created", tags={"status": payment.status.value})

        # The session may be unusable after a failed increment, so nothing below reloads the payment
        payment_id, promo_code_id = payment.id, payment.promo_code_id
        created = project(payment_schemas.Payment, payment)

        # The payment is committed; a failed increment leaves usage_count behind
        if promo_code_id is not None:
            try:
                self.promo_codes.increment_usage(promo_code_id)
            except (SQLAlchemyError, NotFoundError) as e:
                report_inconsistency(
                    f"Payment {payment_id} committed but usage of promo code {promo_code_id} was not incremented",
                    exc=e,
                    kind="promo_usage_increment",
                    payment_id=payment_id,
                    promo_code_id=promo_code_id,
                )
                self.db.rollback()

        return created

    def list(self, filter_in: payment_schemas.PaymentFilter, params: PageParams) -> Page[payment_schemas.Payment]:
        where = filters.compose(
            filters.equals(models.Payment.status, filter_in.status),
            filters.any_contains(SEARCH_COLUMNS, filter_in.search),
            filters.equals(models.Payment.email, filter_in.email),
            filters.date_range(
                filters.timestamp_column(models.Payment, filter_in.filter_by_updated),
                filter_in.date_from,
                filter_in.date_to,
            ),
        )
        query = self.db.query(models.Payment).filter(where)
        return paginate(query, params, payment_schemas.Payment, order_by=models.Payment.created_at.desc())

    def get(self, payment_id: int) -> payment_schemas.Payment:
        return project(payment_schemas.Payment, self._get(payment_id))

    def update(self, payment_id: int, payment_in: payment_schemas.PaymentUpdate) -> payment_schemas.Payment:
        payment = self._get(payment_id)
        update_data = changes(payment_in, models.Payment)

        new_promo_code_id = update_data.get("promo_code_id")
        if new_promo_code_id is not None and new_promo_code_id != payment.promo_code_id:
            self._check_promo_code(new_promo_code_id)

        apply_changes(payment, update_data)
        self.db.commit()
        self.db.refresh(payment)
        return project(payment_schemas.Payment, payment)

    def delete(self, payment_id: int) -> Message:
        payment = self._get(payment_id)
        self.db.delete(payment)
        self.db.commit()
        return Message(message="Payment deleted successfully")

    @metrics.timing("payments.stats")
    def stats(self, date_from: Optional[datetime] = None, date_to: Optional[datetime] = None) -> payment_schemas.PaymentStats:
        period = filters.date_range(models.Payment.created_at, date_from, date_to)

        def count(status: models.PaymentStatus) -> int:
            return self.db.query(func.count(models.Payment.id)).filter(
                filters.compose(models.Payment.status == status, period)
            ).scalar()

        total_amount = self.db.query(func.sum(models.Payment.amount)).filter(
            filters.compose(models.Payment.status == models.PaymentStatus.COMPLETED, period)
        ).scalar() or 0

        return payment_schemas.PaymentStats(
            pending=count(models.PaymentStatus.PENDING),
            completed=count(models.PaymentStatus.COMPLETED),
            total_amount=total_amount,
        )
