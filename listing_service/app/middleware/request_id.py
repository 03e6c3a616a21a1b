"""Request ID middleware for per-request tracking.

1. Takes the request ID from the ``X-Request-ID`` header, or generates a UUID
2. Stores it in ``request.state.request_id`` (list envelopes echo it)
3. Adds it to the logging context for every record of the request
4. Returns it in the ``X-Request-ID`` response header
5. Clears the logging context when the request completes
"""

from __future__ import annotations

import re
import uuid
from typing import TYPE_CHECKING

from starlette.datastructures import MutableHeaders

from listing_service.infra.logging.context import clear_log_context, set_log_context

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

HEADER_NAME = "x-request-id"

# Client-supplied IDs are echoed back and logged, so keep them tame.
_ACCEPTABLE_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")


class RequestIDMiddleware:
    """Pure ASGI middleware attaching a request ID to every HTTP request.

    Usage:
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)

        @app.get("/")
        async def root(request: Request):
            return {"request_id": request.state.request_id}
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._extract(scope) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        set_log_context(request_id=request_id)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(HEADER_NAME, request_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            clear_log_context()

    @staticmethod
    def _extract(scope: Scope) -> str | None:
        for name, value in scope.get("headers", []):
            if name == HEADER_NAME.encode("latin-1"):
                candidate = value.decode("latin-1").strip()
                if _ACCEPTABLE_ID.fullmatch(candidate):
                    return candidate
                return None
        return None
