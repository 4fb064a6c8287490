"""Access logging — one line per HTTP request.

``AccessLogMiddleware`` wraps the whole ASGI application and interposes a
``StatusRecorder`` in front of ``send`` so the status code that actually
left the server is the one logged::

    - 127.0.0.1:51234 - GET /hello.txt - 200
"""

import logging

from mhs._internal.asgi import ASGIApp, Message, Receive, Scope, Send
from mhs.http.request import format_client

logger = logging.getLogger("mhs.access")


class StatusRecorder:
    """A ``send`` proxy that remembers the response status.

    Defaults to 200, the status a response gets when nothing set one.
    """

    __slots__ = ("_send", "status")

    def __init__(self, send: Send) -> None:
        self._send = send
        self.status = 200

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
        await self._send(message)


def request_target(scope: Scope) -> str:
    """Path plus query string, as the client sent them."""
    query = scope.get("query_string", b"")
    if query:
        return f"{scope['path']}?{query.decode('latin-1')}"
    return scope["path"]


class AccessLogMiddleware:
    """ASGI wrapper that writes an access-log line after every HTTP request.

    Non-HTTP scopes (lifespan) pass straight through. The line is written
    even when the wrapped app raises, so every request that reached a
    handler is accounted for.
    """

    __slots__ = ("app",)

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        recorder = StatusRecorder(send)
        try:
            await self.app(scope, receive, recorder)
        finally:
            logger.info(
                "- %s - %s %s - %d",
                format_client(scope.get("client")),
                scope["method"],
                request_target(scope),
                recorder.status,
            )
