"""
Request body size limit.

Rejects a declared ``Content-Length`` over the limit up front and counts the
bytes actually received, so chunked uploads are capped too.
"""

import logging

from fastapi.responses import JSONResponse

from ..core.errors import PayloadTooLargeError

log = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    def __init__(self, app, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = dict(scope.get("headers") or []).get(b"content-length")
        if declared is not None and declared.isdigit() and int(declared) > self.max_body_size:
            await self._reject(scope, receive, send)
            return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive():
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    exceeded = True
                    raise PayloadTooLargeError()
            return message

        async def guarded_send(message):
            nonlocal response_started
            # whatever the app renders for the aborted read is replaced by the 413
            if exceeded and not response_started:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except PayloadTooLargeError:
            if not exceeded:
                raise
        if exceeded and not response_started:
            log.info("%s %s rejected: body over %d bytes", scope["method"], scope["path"], self.max_body_size)
            await self._reject(scope, receive, send)

    async def _reject(self, scope, receive, send) -> None:
        err = PayloadTooLargeError()
        response = JSONResponse(status_code=err.status_code, content=err.to_dict())
        await response(scope, receive, send)
