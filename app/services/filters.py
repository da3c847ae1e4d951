"""Composable WHERE clauses for list endpoints.

Every helper returns ``None`` when its input is absent, so callers can pass
the raw filter values straight through and ``compose`` drops the gaps.
"""
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement


def contains(column, value: Optional[str]) -> Optional[ColumnElement]:
    """Case-insensitive substring match"""
    if not value:
        return None
    return column.icontains(value, autoescape=True)


def any_contains(columns: Iterable, value: Optional[str]) -> Optional[ColumnElement]:
    """``contains`` OR-ed across several columns"""
    if not value:
        return None
    return or_(*(contains(column, value) for column in columns))


def equals(column, value) -> Optional[ColumnElement]:
    if value is None:
        return None
    return column == value


def date_range(column, date_from: Optional[datetime], date_to: Optional[datetime]) -> Optional[ColumnElement]:
    """Inclusive range; either bound may be open"""
    clauses = []
    if date_from is not None:
        clauses.append(column >= date_from)
    if date_to is not None:
        clauses.append(column <= date_to)
    if not clauses:
        return None
    return and_(*clauses)


def timestamp_column(model, filter_by_updated: bool = False):
    return model.updated_at if filter_by_updated else model.created_at


def compose(*clauses: Optional[ColumnElement]) -> ColumnElement:
    """AND of the present clauses; no clauses matches everything"""
    present = [clause for clause in clauses if clause is not None]
    if not present:
        return true()
    return and_(*present)
