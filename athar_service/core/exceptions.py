from fastapi import Request, FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger(__name__)

class ServiceError(Exception):
    """Base exception for service-related errors."""
    code = "SERVICE_ERROR"

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class NotFoundError(ServiceError):
    """Raised when a resource is not found."""
    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)

class BadInputError(ServiceError):
    """Raised for invalid user input."""
    code = "BAD_REQUEST"

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=400)


_HTTP_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    503: "SERVICE_UNAVAILABLE",
}


def error_body(message: str, code: str, details=None) -> dict:
    error = {"code": code}
    if details is not None:
        error["details"] = details
    return {"status": "error", "message": message, "data": None, "error": error}


def setup_exception_handlers(app: FastAPI):
    """Add custom exception handlers to the FastAPI app."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        logger.warning(f"Service error occurred: {exc.message}", extra={"error_type": type(exc).__name__})
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.code),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request to {request.url.path}: validation failed")
        return JSONResponse(
            status_code=422,
            content=error_body(
                "Invalid request parameters",
                "VALIDATION_ERROR",
                jsonable_encoder(exc.errors()),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), _HTTP_CODES.get(exc.status_code, "HTTP_ERROR")),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_generic_exception(request: Request, exc: Exception):
        logger.error(f"An unexpected error occurred: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body("An internal server error occurred.", "INTERNAL_SERVER_ERROR"),
        )

    logger.info("Exception handlers configured.")
