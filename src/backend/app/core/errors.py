from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

CREDENTIAL_MISSING_MESSAGE = (
    "API key not configured. Set OPENAI_API_KEY (or XAI_API_KEY) in your environment or .env file."
)

# 400 messages for bodies that fail schema validation, keyed by route path
VALIDATION_MESSAGES = {
    "/api/summarize": "Please provide paragraphs",
    "/api/translate": "Please provide text to translate",
}


class ProxyError(Exception):
    """Base class for failures that map onto a JSON error response."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, details: str | None = None, *, message: str | None = None):
        self.details = details or ""
        if message:
            self.message = message
        super().__init__(self.details or self.message)


class ValidationError(ProxyError):
    status_code = 400
    message = "Invalid request"


class ConfigurationError(ProxyError):
    message = CREDENTIAL_MISSING_MESSAGE


class UpstreamError(ProxyError):
    """Non-2xx reply from the chat completion API."""

    message = "API request failed"

    def __init__(self, status_code: int, body: str):
        self.upstream_status = status_code
        self.body = body
        super().__init__(f"{status_code}: {body}")


class TransportError(ProxyError):
    message = "Could not reach the model API"


class UpstreamTimeoutError(ProxyError):
    message = "Model API request timed out"


class MalformedResponseError(ProxyError):
    message = "Model API returned an unusable response"


class NoChoicesError(MalformedResponseError):
    """Reply decoded but carried an empty or missing ``choices`` list."""


def error_body(message: str, details: Any = None, **extra: Any) -> dict:
    payload: dict[str, Any] = {"error": message}
    if details is not None:
        payload["details"] = details
    payload.update({k: v for k, v in extra.items() if v is not None})
    return payload


def error_response(status: int, message: str, details: Any = None, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status, content=error_body(message, details, **extra))


def _describe_validation_errors(errors: list[dict]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        return error_response(exc.status_code, exc.message, exc.details or None)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, exc.detail if exc.detail else "HTTP error")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = VALIDATION_MESSAGES.get(request.url.path, "Invalid request body")
        logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
        return error_response(400, message, _describe_validation_errors(exc.errors()))


def register_defect_boundary(app: FastAPI) -> None:
    """Turn any exception that escapes a route into a JSON 500.

    Keeps the worker serving later requests without masking errors outside
    request handling.
    """

    @app.middleware("http")
    async def catch_unhandled(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unhandled error while serving %s %s", request.method, request.url.path)
            return error_response(500, "Internal server error", str(exc) or exc.__class__.__name__)
