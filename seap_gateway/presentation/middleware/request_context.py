"""Correlates every log line and error body of a call with one request id."""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Operator consoles send their own ids; anything else is replaced
_ACCEPTED_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def get_request_id() -> Optional[str]:
    """Request id of the call being handled, or None outside a request."""
    return request_id_var.get()


def resolve_request_id(header_value: Optional[str]) -> str:
    """Keep a well-formed caller id, otherwise mint a UUID4."""
    if header_value and _ACCEPTED_REQUEST_ID.match(header_value):
        return header_value
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds the request id for the duration of a call.

    The id lands in the structlog context (so evaluation and bureau logs
    carry it), in error bodies through `get_request_id`, and in the
    X-Request-ID response header.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(self.HEADER_NAME))

        token = request_id_var.set(request_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
            response.headers[self.HEADER_NAME] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
            request_id_var.reset(token)
