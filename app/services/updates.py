from typing import Any, Dict
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.core.exceptions import ValidationError


def changes(update_in: BaseModel, model) -> Dict[str, Any]:
    """Fields the client actually sent, with explicit nulls allowed only on nullable columns"""
    data = update_in.model_dump(exclude_unset=True)
    columns = model.__table__.columns
    for field, value in data.items():
        if value is None and field in columns and not columns[field].nullable:
            raise ValidationError(f"{to_camel(field)} must not be null", field=to_camel(field))
    return data


def apply_changes(obj, data: Dict[str, Any]) -> None:
    for field, value in data.items():
        setattr(obj, field, value)
