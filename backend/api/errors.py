"""Exception handlers mapping engine errors to the JSON error contract.

Every error body carries ``error``; ``details`` is added for validation
failures always, and for server errors only outside production.
"""

import logging
import math
import time

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from config import settings
from services.errors import EngineError, PayloadValidationError

logger = logging.getLogger(__name__)

RATE_LIMITED_MESSAGE = "Too many requests. Please try again later."


def _error_body(message: str, details: object = None) -> dict:
    body: dict = {"error": message}
    if details is not None:
        body["details"] = details
    return body


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=_error_body(PayloadValidationError.public_message, jsonable_encoder(exc.errors())),
    )


async def engine_error_handler(request: Request, exc: EngineError) -> JSONResponse:
    if isinstance(exc, PayloadValidationError):
        details = exc.details
    elif exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        details = str(exc) if settings.expose_error_details else None
    else:
        details = None
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.public_message, details))


def _reset_time_ms(request: Request) -> int:
    """Epoch milliseconds at which the caller's window frees a slot."""
    view_limit = getattr(request.state, "view_rate_limit", None)
    limiter = getattr(request.app.state, "limiter", None)
    if view_limit is None or limiter is None:
        return int(time.time() * 1000)
    limit_item, identifiers = view_limit
    reset_at, _remaining = limiter.limiter.get_window_stats(limit_item, *identifiers)
    return int(reset_at * 1000)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    reset_ms = _reset_time_ms(request)
    retry_after = max(0, math.ceil(reset_ms / 1000 - time.time()))
    return JSONResponse(
        status_code=429,
        content={"error": RATE_LIMITED_MESSAGE, "resetTime": reset_ms},
        headers={"Retry-After": str(retry_after)},
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(EngineError, engine_error_handler)
