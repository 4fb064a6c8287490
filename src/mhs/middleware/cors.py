"""Cross-origin middleware.

Adds a fixed header set that lets browsers fetch from the server across
origins, including from cross-origin-isolated pages (``SharedArrayBuffer``,
WebAssembly threads). There is no origin allow-list and no preflight
negotiation: the headers go on every response, errors and redirects
included.
"""

from mhs.http.request import Request
from mhs.http.response import AnyResponse
from mhs.middleware.protocol import Next

CORS_HEADERS: tuple[tuple[str, str], ...] = (
    ("Access-Control-Allow-Origin", "*"),
    ("Access-Control-Allow-Headers", "Content-Type"),
    ("Cross-Origin-Embedder-Policy", "require-corp"),
    ("Cross-Origin-Opener-Policy", "same-origin"),
)


class CORSMiddleware:
    """Add ``CORS_HEADERS`` to every response.

    Usage::

        app.add_middleware(CORSMiddleware())
    """

    __slots__ = ("headers",)

    def __init__(self, headers: tuple[tuple[str, str], ...] = CORS_HEADERS) -> None:
        self.headers = headers

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        response = await next(request)
        for name, value in self.headers:
            response = response.with_header(name, value)
        return response
