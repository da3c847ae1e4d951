from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
import time
import uuid
import logging
from app.core.monitoring import metrics

logger = logging.getLogger(__name__)

UNMATCHED_ROUTE = "<unmatched>"

def route_template(request: Request) -> str:
    """Path template of the matched route, e.g. ``/api/v1/visitors/{visitor_id}``.

    Metrics are keyed on the template so concrete ids and emails do not
    create a new series per request.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE

class LoggingMiddleware(BaseHTTPMiddleware):
    """Request logging with a request id shared by the client and the logs"""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }

        logger.info(
            f"{request.method} {request.url.path} started",
            extra={**context, "client_host": request.client.host if request.client else None},
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"{request.method} {request.url.path} failed",
                extra={**context, "duration_ms": duration_ms},
                exc_info=True,
            )
            metrics.increment("http.requests", tags={"status": 500})
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        endpoint = route_template(request)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={**context, "status_code": response.status_code, "duration_ms": duration_ms},
        )
        metrics.increment("http.requests", tags={"status": response.status_code})
        metrics.gauge("http.request.duration", duration_ms, tags={"endpoint": f"{request.method} {endpoint}"})

        response.headers["X-Request-ID"] = request_id
        return response
