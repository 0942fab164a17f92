import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Context variable used by log filter to inject request id
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

_VALID_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def resolve_request_id(header_value: str | None) -> str:
    """Reuse a well-formed client ``X-Request-ID`` or mint a new one."""

    if header_value and _VALID_ID.match(header_value):
        return header_value
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id for the handler and echo it on the response."""

    async def dispatch(self, request: Request, call_next):
        req_id = getattr(request.state, "request_id", None) or resolve_request_id(
            request.headers.get("X-Request-ID")
        )
        request.state.request_id = req_id
        token = request_id_ctx.set(req_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers["X-Request-ID"] = req_id
        return response
