from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
from app.core.config import settings
from app.api import deps
from app.api.api_v1.api import api_router
from app.db.init_db import init_db
from app.core.exceptions import register_exception_handlers
from app.core.monitoring import init_sentry
from app.core.logging_middleware import LoggingMiddleware
import logging

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Admin backend for partners, requests, payments, promo codes and site analytics",
    version="1.0.0",
    docs_url="/api/docs" if settings.docs_enabled else None,
    redoc_url="/api/redoc" if settings.docs_enabled else None,
)

# Initialize monitoring
init_sentry()

register_exception_handlers(app)

# Add middleware
app.add_middleware(LoggingMiddleware)

if settings.RAILWAY_STATIC_URL:
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=[
            settings.RAILWAY_STATIC_URL,
            "*.railway.app",
            "localhost",
            "127.0.0.1"
        ]
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.PROJECT_NAME} in {settings.RAILWAY_ENVIRONMENT or 'local'} environment")
    init_db()

@app.get("/")
async def root():
    return {
        "message": settings.PROJECT_NAME,
        "version": "1.0.0",
        "status": "Running",
        "environment": settings.RAILWAY_ENVIRONMENT or "local",
    }

@app.get("/health")
def health_check(db: Session = Depends(deps.get_db)):
    db.execute(text("SELECT 1"))
    return {
        "status": "healthy",
        "environment": settings.RAILWAY_ENVIRONMENT,
        "database": "connected",
    }
