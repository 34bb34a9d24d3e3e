import logging
import time
import uuid
from fastapi import Request, Response
from .logging_config import request_id_var

logger = logging.getLogger(__name__)

# Paths never counted as content hits.
_UNTRACKED_MARKERS = ("/health", "/docs", "/openapi.json", "/redoc", "/static")


async def logging_middleware(request: Request, call_next) -> Response:
    """
    Middleware to add a request_id to each request and log the request/response.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    token = request_id_var.set(request_id)

    start_time = time.time()
    try:
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000  # in milliseconds

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time-MS"] = f"{process_time:.2f}"
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(process_time, 2),
            },
        )
        return response
    finally:
        request_id_var.reset(token)


def should_track(path: str) -> bool:
    return not any(marker in path for marker in _UNTRACKED_MARKERS)


async def analytics_middleware(request: Request, call_next) -> Response:
    """Count the hit against its endpoint once the response is ready."""
    response = await call_next(request)

    settings = getattr(request.app.state, "settings", None)
    analytics_service = getattr(request.app.state, "analytics_service", None)
    if (
        analytics_service is not None
        and settings is not None
        and settings.ANALYTICS_ENABLED
        and should_track(request.url.path)
    ):
        analytics_service.track_hit_in_background(request.url.path, request.method)

    return response
