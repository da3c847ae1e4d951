import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
import logging
from app.core.config import settings
import time
from functools import wraps
from typing import Callable

logger = logging.getLogger(__name__)

def init_sentry():
    """Initialize Sentry error tracking"""
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                SqlalchemyIntegration(),
            ],
            traces_sample_rate=0.1 if settings.RAILWAY_ENVIRONMENT == "production" else 1.0,
            environment=settings.RAILWAY_ENVIRONMENT or "local",
            release=settings.RAILWAY_GIT_COMMIT_SHA,
            attach_stacktrace=True,
            send_default_pii=False,  # requests and payments carry contact data
        )
        logger.info("Sentry initialized successfully")

def report_inconsistency(message: str, exc: BaseException = None, **context) -> None:
    """Surface a data inconsistency to operators without failing the request"""
    logger.error(message, extra=context, exc_info=exc)
    metrics.increment("data.inconsistency", tags={"kind": context.get("kind", "unknown")})
    sentry_sdk.set_context("inconsistency", context)
    if exc is not None:
        sentry_sdk.capture_exception(exc)
    else:
        sentry_sdk.capture_message(message, level="error")

# Custom metrics collector
class MetricsCollector:
    def __init__(self):
        self.metrics = {}

    def increment(self, metric: str, value: int = 1, tags: dict = None):
        """Increment a counter metric"""
        key = f"{metric}:{tags}" if tags else metric
        self.metrics[key] = self.metrics.get(key, 0) + value

    def gauge(self, metric: str, value: float, tags: dict = None):
        """Set a gauge metric"""
        key = f"{metric}:{tags}" if tags else metric
        self.metrics[key] = value

    def get(self, metric: str, tags: dict = None):
        key = f"{metric}:{tags}" if tags else metric
        return self.metrics.get(key, 0)

    def timing(self, metric: str):
        """Decorator recording the duration of a synchronous call as a gauge"""
        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.time()
                try:
                    result = func(*args, **kwargs)
                    return result
                finally:
                    duration = (time.time() - start_time) * 1000  # ms
                    self.gauge(f"{metric}.duration", duration)
                    logger.debug(f"{metric} took {duration:.2f}ms")

            return wrapper
        return decorator

metrics = MetricsCollector()
