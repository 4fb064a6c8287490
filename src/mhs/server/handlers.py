"""Route handlers for the three binding kinds.

Each handler is a small callable object: ``await handler(request)``
returns a response or raises an ``HTTPError``. Handlers hold only
immutable state, so one instance serves concurrent requests.
"""

import logging
from pathlib import Path

import anyio

from mhs.errors import HTTPError, NotFound
from mhs.http.request import Request
from mhs.http.response import AnyResponse, Response, reason_phrase
from mhs.routing.route import Handler
from mhs.routing.templates import Binding, Kind
from mhs.server.files import serve_path

logger = logging.getLogger("mhs.server")


def sendable_status(status: int) -> bool:
    """Whether *status* fits the three-digit HTTP/1.1 status line."""
    return 100 <= status <= 999


class StatusHandler:
    """Respond with a fixed status and its reason phrase as the body.

    A status that cannot be sent is answered with a 500 instead.
    """

    __slots__ = ("status",)

    def __init__(self, status: int) -> None:
        self.status = status

    async def __call__(self, request: Request) -> Response:
        if not sendable_status(self.status):
            raise HTTPError(status=500, detail="Internal Server Error")
        return Response(body=reason_phrase(self.status), status=self.status)

    def __repr__(self) -> str:
        return f"StatusHandler({self.status})"


class DirectoryHandler:
    """Serve files under *root*, with *prefix* stripped from the URL path.

    Symlinks are resolved and anything that ends up outside *root* is
    reported as missing.
    """

    __slots__ = ("prefix", "root")

    def __init__(self, root: str | Path, prefix: str = "/") -> None:
        self.root = Path(root).resolve()
        self.prefix = prefix

    async def __call__(self, request: Request) -> AnyResponse:
        if not request.path.startswith(self.prefix):
            raise NotFound()
        relative = request.path[len(self.prefix) :].lstrip("/")
        target = await anyio.Path(self.root / relative).resolve()
        if not Path(target).is_relative_to(self.root):
            raise NotFound()
        return await serve_path(request, Path(target), root=self.root)

    def __repr__(self) -> str:
        return f"DirectoryHandler({str(self.root)!r}, prefix={self.prefix!r})"


class FileHandler:
    """Serve one file for every request to the route, whatever the method.

    The path is looked up per request: a file created after startup is
    served as soon as it exists.
    """

    __slots__ = ("path",)

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def __call__(self, request: Request) -> AnyResponse:
        return await serve_path(request, self.path, redirect_index=False)

    def __repr__(self) -> str:
        return f"FileHandler({str(self.path)!r})"


def handler_for(binding: Binding) -> Handler:
    """Build the request handler for a classified binding."""
    match binding.kind:
        case Kind.STATUS:
            status = int(binding.payload)
            if not sendable_status(status):
                logger.error(
                    "%s: status %d cannot be sent, requests will get 500",
                    binding.request_path,
                    status,
                )
            return StatusHandler(status)
        case Kind.DIRECTORY:
            return DirectoryHandler(str(binding.payload), prefix=binding.request_path)
        case Kind.FILE:
            return FileHandler(str(binding.payload))
