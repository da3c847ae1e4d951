"""Request -> Partner bonus status propagation.

Runs as a background task after the request row is committed, in its own
session. It is at-most-once and never retried: a missing partner or a failed
update is logged and counted, the request itself stays created.
"""
import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import models
from app.core.monitoring import metrics

logger = logging.getLogger(__name__)


def mark_partner_bonus_pending(session_factory: Callable[[], Session], partner_code: str, request_id: int) -> bool:
    """Set the bonus status of the partner owning ``partner_code`` to PENDING"""
    db = session_factory()
    try:
        partner = db.query(models.Partner).filter(models.Partner.code == partner_code).first()
        if partner is None:
            logger.warning(
                f"Request {request_id} references unknown partner code {partner_code!r}; bonus status not updated"
            )
            metrics.increment("partner_bonus.failed", tags={"reason": "partner_not_found"})
            return False

        partner.bonus_status = models.PartnerBonusStatus.PENDING
        db.commit()
        logger.info(f"Partner {partner.id} bonus status set to PENDING by request {request_id}")
        metrics.increment("partner_bonus.updated")
        return True
    except SQLAlchemyError:
        db.rollback()
        logger.error(
            f"Failed to update bonus status of partner {partner_code!r} for request {request_id}",
            exc_info=True,
        )
        metrics.increment("partner_bonus.failed", tags={"reason": "storage_error"})
        return False
    finally:
        db.close()
