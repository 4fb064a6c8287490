"""ASGI handler — translates ASGI scope/messages to mhs types.

Converts scope dicts to typed Request objects, dispatches through
middleware and routing, and sends the response back through ASGI send().
"""

from collections.abc import Callable
from typing import Any

from mhs._internal.asgi import Receive, Scope, Send
from mhs.errors import HTTPError
from mhs.http.request import Request
from mhs.http.response import AnyResponse
from mhs.middleware.protocol import Next
from mhs.routing.router import Router
from mhs.server.errors import handle_http_error, handle_internal_error
from mhs.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...] = (),
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    # Innermost handler: routing plus error conversion, so middleware
    # always receives a response (errors get CORS headers too)
    async def dispatch(req: Request) -> AnyResponse:
        try:
            match = router.match(req.path, req.query_string)
            return await match.route.handler(req)
        except HTTPError as exc:
            return handle_http_error(exc, req)
        except Exception as exc:
            return handle_internal_error(exc, req)

    # Wrap middleware around the dispatch
    handler: Next = dispatch
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> AnyResponse:
            return await _mw(req, _next)

        handler = make_next

    try:
        response = await handler(request)
    except Exception as exc:
        response = handle_internal_error(exc, request)

    await send_response(response, send, head=request.is_head)
