"""Immutable HTTP request.

Frozen metadata taken from the ASGI scope. Bodies are never inspected,
so unlike a general-purpose framework there is no body access here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mhs.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    headers: Headers
    query_string: bytes = b""

    @property
    def is_head(self) -> bool:
        return self.method == "HEAD"

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
        )


def format_client(client: tuple[str, int] | list[Any] | None) -> str:
    """Render an ASGI ``client`` pair the way access logs show it."""
    if not client:
        return "-"
    host, port = client[0], client[1]
    if ":" in str(host):
        return f"[{host}]:{port}"
    return f"{host}:{port}"
