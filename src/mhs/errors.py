"""mhs exception hierarchy.

Shared across the CLI, router, file handlers, and request pipeline so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class MhsError(Exception):
    """Base for all mhs-specific errors."""


class ConfigurationError(MhsError):
    """Raised when the server configuration is invalid.

    Reported by the CLI as a single diagnostic line before any port is bound.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(MhsError):
    """An error that maps directly to an HTTP status code.

    Raised by the router and the file handlers. The request pipeline
    converts these into plain-text responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched, or the file does not exist."""

    def __init__(self, detail: str = "page not found") -> None:
        super().__init__(status=404, detail=detail)


class Forbidden(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """403 — the file exists but cannot be read."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class MovedPermanently(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """301 — canonical redirect (trailing slash, cleaned path).

    A non-empty *query* is appended to the location unchanged.
    """

    def __init__(self, location: str, query: bytes = b"") -> None:
        if query:
            location = f"{location}?{query.decode('latin-1')}"
        super().__init__(
            status=301,
            detail="Moved Permanently",
            headers=(("Location", location),),
        )

    @property
    def location(self) -> str:
        return self.headers[0][1]


class RangeNotSatisfiable(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """416 — the requested byte range starts past the end of the file."""

    def __init__(self, size: int) -> None:
        super().__init__(
            status=416,
            detail="invalid range: failed to overlap",
            headers=(("Content-Range", f"bytes */{size}"),),
        )
