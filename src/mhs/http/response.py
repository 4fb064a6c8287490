"""HTTP responses with a chainable .with_header() API.

``Response`` carries its body in memory; ``FileResponse`` names a byte
span of a file that the sender streams. Each transformation returns a new
object and leaves the receiver unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from http import HTTPStatus
from pathlib import Path


def _find_header(
    headers: tuple[tuple[str, str], ...], name: str, default: str | None
) -> str | None:
    lowered = name.lower()
    for key, value in headers:
        if key.lower() == lowered:
            return value
    return default


def reason_phrase(status: int) -> str:
    """Standard reason phrase for *status*, or ``""`` when unknown."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body and status, then chain ``.with_header()``
    calls. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    # -- Lookups --

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name* (case-insensitive)."""
        return _find_header(self.headers, name, default)

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


@dataclass(frozen=True, slots=True)
class FileResponse:
    """A response whose body is read from disk while it is sent.

    ``length`` bytes starting at ``offset`` are streamed in chunks, so a
    large file is never held in memory. Supports the same
    ``.with_header()`` API as ``Response`` so middleware can add headers
    without knowing the body comes from a file.
    """

    path: Path
    offset: int = 0
    length: int = 0
    status: int = 200
    content_type: str = "application/octet-stream"
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> FileResponse:
        """Return a new FileResponse with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name* (case-insensitive)."""
        return _find_header(self.headers, name, default)


type AnyResponse = Response | FileResponse
