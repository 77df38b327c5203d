"""Error handlers and HTTP middleware for the API."""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from salesboard.config import config

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("salesboard.api.request")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def setup_error_handlers(app: FastAPI) -> None:
    """Every error goes out as a static plain-text body."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> PlainTextResponse:
        fields = [" -> ".join(str(loc) for loc in error["loc"]) for error in exc.errors()]
        logger.info(f"Rejected {request.url.path}: invalid {', '.join(fields)}")
        return PlainTextResponse("Invalid query parameters", status_code=400)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> PlainTextResponse:
        logger.error(f"Unexpected error on {request.url.path}: {exc}", exc_info=exc)
        return PlainTextResponse(
            "Internal server error", status_code=500, headers=SECURITY_HEADERS
        )


def setup_middleware(app: FastAPI) -> None:
    """CORS, security headers and per-request access logging."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    if not config.REQUEST_LOG_ENABLED:
        return

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        # an exception escaping call_next is answered 500 by the error handler
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            request_logger.info(
                f"{request.method} {request.url.path} {status_code} {duration_ms}ms"
            )
