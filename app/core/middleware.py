"""
app/core/middleware.py

Purpose: Request body ceiling

- Rejects bodies over MAX_BODY_BYTES with a 413
- Counts the bytes actually received, so chunked uploads are bounded too
- Hands the buffered body on to the application unchanged
"""

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.errors import error_response
from app.core.exceptions import PayloadTooLargeError
from app.core.logging import get_logger

logger = get_logger(__name__)


class BodySizeLimitMiddleware:
    """
    Pure ASGI middleware. The body is read whole before the route runs;
    handlers parse JSON from the full body anyway.
    """

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        content_length = headers.get(b"content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                declared = 0
            if declared > self.max_bytes:
                await self._reject(scope, receive, send, declared)
                return

        chunks = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_bytes:
                await self._reject(scope, receive, send, received)
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: int):
        logger.warning(
            f"Rejected body of at least {size} bytes on {scope.get('path')}",
            extra={"route": scope.get("path")}
        )
        response = error_response(
            PayloadTooLargeError(f"Request body exceeds {self.max_bytes} bytes")
        )
        await response(scope, receive, send)
