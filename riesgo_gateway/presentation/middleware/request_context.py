"""Request ID propagation for tracing across logs and responses."""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Request ID of the request being handled, if any."""
    return request_id_var.get()


def resolve_request_id(incoming: Optional[str]) -> str:
    """Reuse a caller-supplied ID when it is safe to log, otherwise mint one."""
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds a request ID for the lifetime of each request.

    The ID is stored in a context variable for the exception handlers,
    bound into the structlog context so every event of the request carries
    it, and echoed back in the X-Request-ID response header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        token = request_id_var.set(request_id)
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
