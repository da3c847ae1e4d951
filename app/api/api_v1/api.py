from fastapi import APIRouter
from app.api.api_v1.endpoints import (
    partners, requests, payments, promo_codes, visitors, buttons, notifications
)

api_router = APIRouter()

api_router.include_router(partners.router, prefix="/partners", tags=["partners"])
api_router.include_router(requests.router, prefix="/requests", tags=["requests"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(promo_codes.router, prefix="/promo-codes", tags=["promo-codes"])
api_router.include_router(visitors.router, prefix="/visitors", tags=["visitors"])
api_router.include_router(buttons.router, prefix="/buttons", tags=["buttons"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
