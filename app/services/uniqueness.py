"""Pre-write checks for unique columns.

The check and the write are separate round-trips, so two concurrent writers
can both pass ``ensure_unique``. The unique constraint in the database is the
authority: ``commit_unique`` turns its violation into the same field-specific
``ConflictError`` the pre-check would have raised.
"""
import logging
from typing import Dict, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError

logger = logging.getLogger(__name__)


def conflict_for(entity: str, field: str) -> ConflictError:
    return ConflictError(f"{entity} with this {field} already exists", field=field)


def find_collision(db: Session, model, candidates: Dict[str, object], exclude_id=None) -> Optional[str]:
    """Return the first candidate field already taken by another row"""
    values = {field: value for field, value in candidates.items() if value is not None}
    if not values:
        return None

    query = db.query(model).filter(or_(*(getattr(model, field) == value for field, value in values.items())))
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    existing = query.first()
    if existing is None:
        return None

    for field, value in values.items():
        if getattr(existing, field) == value:
            return field
    return None


def ensure_unique(db: Session, model, candidates: Dict[str, object], entity: str, exclude_id=None) -> None:
    field = find_collision(db, model, candidates, exclude_id=exclude_id)
    if field is not None:
        raise conflict_for(entity, field)


def commit_unique(db: Session, model, candidates: Dict[str, object], entity: str, exclude_id=None) -> None:
    """Commit, mapping a unique-constraint violation to a ConflictError"""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Unique constraint hit on %s after pre-check passed", model.__tablename__)
        field = find_collision(db, model, candidates, exclude_id=exclude_id)
        if field is None:
            raise
        raise conflict_for(entity, field)
