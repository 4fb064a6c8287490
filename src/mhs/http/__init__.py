"""HTTP primitives — immutable request, chainable response, headers."""

from mhs.http.headers import Headers
from mhs.http.request import Request
from mhs.http.response import FileResponse, Response

__all__ = ["FileResponse", "Headers", "Request", "Response"]
