"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> AnyResponse: ...

No base class required. The pipeline checks the shape, not the lineage.
Errors raised by routing are already converted to responses by the time
``next`` returns, so middleware always receives a response object.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from mhs.http.request import Request
from mhs.http.response import AnyResponse

# The next handler in the middleware chain
type Next = Callable[[Request], Awaitable[AnyResponse]]


class Middleware(Protocol):
    """Protocol for mhs middleware.

    Accepts both functions and callable objects::

        async def server_name(request: Request, next: Next) -> AnyResponse:
            response = await next(request)
            return response.with_header("Server", "mhs")
    """

    async def __call__(self, request: Request, next: Next) -> AnyResponse: ...
