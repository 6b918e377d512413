"""Error handling for the SMS Bank Reader API.

Provides custom exception classes and the global handlers that render
them. Every error leaves the API with the same JSON shape:

    {
        "error": "Invalid API key",
        "message": "The provided API key is not valid"
    }

Unexpected exceptions are logged and rendered as a generic 500; no stack
detail reaches the client.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


class AppError(Exception):
    """Base application error."""

    def __init__(self, error: str, message: str = "", status_code: int = 500):
        self.error = error
        self.message = message or error
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, error: str = "Resource not found", message: str = ""):
        super().__init__(error=error, message=message, status_code=404)


class ValidationError(AppError):
    """Request body is malformed."""

    def __init__(self, error: str = "Invalid data format", message: str = ""):
        super().__init__(error=error, message=message, status_code=400)


class AuthenticationError(AppError):
    """API key missing or unknown."""

    def __init__(self, error: str = "Authentication required", message: str = ""):
        super().__init__(error=error, message=message, status_code=401)


def _build_error_body(error: str, message: str) -> dict:
    return {"error": error, "message": message}


# HTTP status code to title mapping
_STATUS_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal server error",
    503: "Service Unavailable",
}


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Request body is invalid"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=exc.error)
        return JSONResponse(
            status_code=exc.status_code,
            content=_build_error_body(exc.error, exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        detail = _describe_validation_error(exc)
        logger.info("request_invalid", path=request.url.path, detail=detail)
        return JSONResponse(
            status_code=400,
            content=_build_error_body("Invalid data format", detail),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        title = _STATUS_TITLES.get(exc.status_code, "Error")
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_build_error_body(title, detail),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path)
        return JSONResponse(
            status_code=500,
            content=_build_error_body(
                "Internal server error", "An unexpected error occurred"
            ),
        )
