from typing import Optional, Type, TypeVar
from pydantic import BaseModel
from sqlalchemy.orm import Query

from app.core.config import settings
from app.schemas.common import Page, PageParams, project_many, total_pages


S = TypeVar("S", bound=BaseModel)


def page_params(resource: str, page: Optional[int] = None, page_size: Optional[int] = None) -> PageParams:
    """Fill in the per-resource default page size"""
    return PageParams(
        page=page or 1,
        page_size=page_size or settings.PAGE_SIZES.get(resource, settings.DEFAULT_PAGE_SIZE),
    )


def paginate(query: Query, params: PageParams, schema: Type[S], order_by=None) -> Page[S]:
    """Run the count and the bounded fetch for ``query``.

    The two statements are independent; under concurrent writes ``total`` and
    ``data`` may disagree.
    """
    total = query.order_by(None).count()
    if order_by is not None:
        query = query.order_by(order_by)
    rows = query.offset(params.skip).limit(params.take).all()
    return Page[schema](
        data=project_many(schema, rows),
        total=total,
        page=params.page,
        page_size=params.page_size,
        total_pages=total_pages(total, params.page_size),
    )
