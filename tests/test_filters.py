from datetime import datetime

from app import models
from app.services import filters


def add_requests(db, *rows):
    for full_name, email, source, created_at in rows:
        db.add(models.Request(
            full_name=full_name,
            phone="+70000000000",
            email=email,
            source=source,
            created_at=created_at,
            updated_at=created_at,
        ))
    db.commit()


def names(db, where):
    return sorted(r.full_name for r in db.query(models.Request).filter(where).all())


def test_absent_values_produce_no_clause():
    assert filters.contains(models.Request.email, None) is None
    assert filters.contains(models.Request.email, "") is None
    assert filters.any_contains([models.Request.email], None) is None
    assert filters.equals(models.Request.status, None) is None
    assert filters.date_range(models.Request.created_at, None, None) is None


def test_timestamp_column():
    assert filters.timestamp_column(models.Request) is models.Request.created_at
    assert filters.timestamp_column(models.Request, True) is models.Request.updated_at


def test_empty_compose_matches_everything(db):
    add_requests(
        db,
        ("Anna", "anna@example.com", "landing", datetime(2024, 1, 1)),
        ("Boris", "boris@example.com", "ads", datetime(2024, 2, 1)),
    )
    assert names(db, filters.compose()) == ["Anna", "Boris"]
    assert names(db, filters.compose(None, None)) == ["Anna", "Boris"]


def test_contains_is_case_insensitive(db):
    add_requests(db, ("Anna", "ANNA@Example.com", "landing", datetime(2024, 1, 1)))
    where = filters.compose(filters.contains(models.Request.email, "anna@example"))
    assert names(db, where) == ["Anna"]


def test_contains_escapes_wildcards(db):
    add_requests(
        db,
        ("Anna", "anna@example.com", "promo_50%", datetime(2024, 1, 1)),
        ("Boris", "boris@example.com", "promo_5000", datetime(2024, 1, 1)),
    )
    where = filters.compose(filters.contains(models.Request.source, "50%"))
    assert names(db, where) == ["Anna"]


def test_any_contains_ors_columns(db):
    add_requests(
        db,
        ("Anna", "anna@example.com", "landing", datetime(2024, 1, 1)),
        ("Boris", "boris@mail.ru", "ads", datetime(2024, 1, 1)),
        ("Clara", "clara@mail.ru", "ads", datetime(2024, 1, 1)),
    )
    where = filters.compose(
        filters.any_contains([models.Request.full_name, models.Request.email], "anna")
    )
    assert names(db, where) == ["Anna"]
    where = filters.compose(
        filters.any_contains([models.Request.full_name, models.Request.email], "mail.ru")
    )
    assert names(db, where) == ["Boris", "Clara"]


def test_date_range_is_inclusive(db):
    add_requests(
        db,
        ("Anna", "a@example.com", "x", datetime(2024, 1, 1)),
        ("Boris", "b@example.com", "x", datetime(2024, 6, 1)),
        ("Clara", "c@example.com", "x", datetime(2024, 12, 31)),
    )
    column = models.Request.created_at
    assert names(db, filters.compose(filters.date_range(column, datetime(2024, 1, 1), datetime(2024, 6, 1)))) == [
        "Anna", "Boris"
    ]
    assert names(db, filters.compose(filters.date_range(column, datetime(2024, 6, 1), None))) == ["Boris", "Clara"]
    assert names(db, filters.compose(filters.date_range(column, None, datetime(2024, 1, 1)))) == ["Anna"]


def test_compose_ands_clauses(db):
    add_requests(
        db,
        ("Anna", "a@example.com", "landing", datetime(2024, 1, 1)),
        ("Boris", "b@example.com", "landing", datetime(2024, 6, 1)),
        ("Clara", "c@example.com", "ads", datetime(2024, 6, 1)),
    )
    where = filters.compose(
        filters.contains(models.Request.source, "landing"),
        filters.date_range(models.Request.created_at, datetime(2024, 3, 1), None),
    )
    assert names(db, where) == ["Boris"]
