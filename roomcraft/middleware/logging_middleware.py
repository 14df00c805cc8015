"""
Request logging middleware with correlation IDs for request tracing.

Each request gets a short id that is stored in a context variable, so any
log line written while the request is being served can be tied back to it.
"""
import logging
import re
import time
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

# Caller-supplied ids are accepted only when they look like ids
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

logger = logging.getLogger(__name__)


def get_request_id() -> str:
    """Get the current request ID from context."""
    return request_id_var.get()


def _new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id, logs its start and end with timing, and
    echoes the id and processing time back in response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        request_id = incoming if _VALID_REQUEST_ID.match(incoming) else _new_request_id()
        token = request_id_var.set(request_id)

        client_ip = request.headers.get("x-forwarded-for", request.client.host if request.client else "-")
        start_time = time.perf_counter()
        logger.info(
            f"[{request_id}] {request.method} {request.url.path} from {client_ip}",
            extra={"request_id": request_id, "event": "request_start"},
        )

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.exception(
                f"[{request_id}] unhandled error after {elapsed_ms:.0f}ms",
                extra={"request_id": request_id, "event": "request_error"},
            )
            raise
        finally:
            request_id_var.reset(token)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            f"[{request_id}] {response.status_code} in {elapsed_ms:.0f}ms",
            extra={"request_id": request_id, "status_code": response.status_code, "event": "request_end"},
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed_ms / 1000:.3f}"
        return response


class ContextualLogger(logging.LoggerAdapter):
    """Logger that prefixes each message with the current request id, when there is one."""

    def __init__(self, name: str):
        super().__init__(logging.getLogger(name), {})

    def process(self, msg, kwargs):
        request_id = get_request_id()
        return (f"[{request_id}] {msg}" if request_id else msg), kwargs


def get_logger(name: str) -> ContextualLogger:
    """Get a contextual logger that includes the request ID."""
    return ContextualLogger(name)
