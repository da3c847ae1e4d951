from typing import Any, List
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api import deps
from app.schemas import Page, PageParams
from app.schemas import button as button_schemas
from app.schemas.common import DateRangeFilter
from app.services.button_service import ButtonService

router = APIRouter()

@router.post("", response_model=button_schemas.Button, status_code=201)
def create_button(
    *,
    db: Session = Depends(deps.get_db),
    button_in: button_schemas.ButtonCreate,
) -> Any:
    """Create button"""
    return ButtonService(db).create(button_in)

@router.get("", response_model=Page[button_schemas.Button])
def list_buttons(
    db: Session = Depends(deps.get_db),
    dates: DateRangeFilter = Depends(deps.date_filter),
    params: PageParams = Depends(deps.pagination("buttons")),
) -> Any:
    """List buttons, newest first"""
    return ButtonService(db).list(dates, params)

@router.post("/track-click", response_model=button_schemas.Button)
def track_click(
    *,
    db: Session = Depends(deps.get_db),
    click_in: button_schemas.TrackClick,
) -> Any:
    """Count a click by button name, creating the button on first click"""
    return ButtonService(db).track_click(click_in)

@router.get("/stats/clicks", response_model=List[button_schemas.ButtonClickStats])
def click_stats(
    db: Session = Depends(deps.get_db),
    dates: DateRangeFilter = Depends(deps.date_filter),
) -> Any:
    """Clicks and button count per button type"""
    return ButtonService(db).click_stats(dates.date_from, dates.date_to)

@router.get("/{button_id}", response_model=button_schemas.Button)
def read_button(
    button_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Get button by ID"""
    return ButtonService(db).get(button_id)

@router.patch("/{button_id}", response_model=button_schemas.Button)
def update_button(
    *,
    button_id: int,
    db: Session = Depends(deps.get_db),
    button_in: button_schemas.ButtonUpdate,
) -> Any:
    """Update button"""
    return ButtonService(db).update(button_id, button_in)

@router.post("/{button_id}/click", response_model=button_schemas.Button)
def click_button(
    button_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """Increment click count"""
    return ButtonService(db).increment_click_count(button_id)

@router.delete("/{button_id}", status_code=204, response_class=Response)
def delete_button(
    button_id: int,
    db: Session = Depends(deps.get_db),
) -> None:
    """Delete button"""
    ButtonService(db).delete(button_id)
