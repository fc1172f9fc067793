# social_api/core/logging/middleware.py
"""
Request ID middleware for FastAPI / Starlette.

Each request gets an id, stored in the contextvar read by RequestIdFilter and echoed in the
`X-Request-ID` response header:

1. An incoming `X-Request-ID` header is reused when it is a sane token (printable, at most
   REQUEST_ID_MAX_LENGTH characters, no whitespace), so upstream proxies can correlate.
2. Otherwise a new UUID4 is generated. Rejecting odd values keeps newlines and huge
   strings out of the logs.
3. The contextvar is reset when the request finishes.

Starlette runs the app-wide `Exception` handler outside every user middleware, after this one
has reset the id. Pass `on_error` (an exception handler `(request, exc) -> Response`) to render
unhandled errors here instead, so they are logged with the request id and the 500 response
carries the header too.
"""

import re
import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .filters import reset_request_id, set_request_id

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_MAX_LENGTH = 128

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:\-]+$")

ErrorHandler = Callable[[Request, Exception], Awaitable[Response]]


def resolve_request_id(incoming: str | None) -> str:
    if incoming and len(incoming) <= REQUEST_ID_MAX_LENGTH and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Sets a request id for each incoming request and returns it in `X-Request-ID`.
    """

    def __init__(self, app: ASGIApp, on_error: ErrorHandler | None = None) -> None:
        super().__init__(app)
        self.on_error = on_error

    async def dispatch(self, request: Request, call_next):
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)

        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                if self.on_error is None:
                    raise
                response = await self.on_error(request, exc)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
