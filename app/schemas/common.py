from datetime import datetime, timezone
from math import ceil
from typing import Annotated, Any, Generic, Iterable, List, Optional, Type, TypeVar
from pydantic import BaseModel, Field, AfterValidator, PlainSerializer
from pydantic.alias_generators import to_camel


def to_naive_utc(value: datetime) -> datetime:
    """Normalize to the naive-UTC form used in storage; naive input is taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def format_timestamp(value: datetime) -> str:
    return to_naive_utc(value).isoformat(timespec="milliseconds") + "Z"


# ISO-8601 on the wire ("2024-01-01T00:00:00.000Z"), naive UTC in Python
UtcDateTime = Annotated[
    datetime,
    AfterValidator(to_naive_utc),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base for every wire schema: camelCase aliases, built from ORM rows."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class DateRangeFilter(BaseModel):
    date_from: Optional[UtcDateTime] = None
    date_to: Optional[UtcDateTime] = None
    filter_by_updated: bool = False


class PageParams(BaseModel):
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def take(self) -> int:
        return self.page_size


def total_pages(total: int, page_size: int) -> int:
    return ceil(total / page_size) if total else 0


T = TypeVar("T")


class Page(CamelModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    page_size: int
    total_pages: int


class Message(BaseModel):
    message: str


S = TypeVar("S", bound=BaseModel)


def project(schema: Type[S], record: Any) -> S:
    """Map a stored record onto the whitelisted fields of ``schema``.

    Extra attributes on the record are dropped. A missing required attribute
    raises ``pydantic.ValidationError``, which surfaces as a 500.
    """
    return schema.model_validate(record)


def project_many(schema: Type[S], records: Iterable[Any]) -> List[S]:
    return [project(schema, record) for record in records]
