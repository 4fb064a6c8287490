"""Error responses for the request pipeline.

Maps HTTPError exceptions and unexpected failures to plain-text
Responses. Neither path ever propagates: a failed request is answered
and logged, and the server keeps running.
"""

import logging

from mhs.errors import HTTPError
from mhs.http.request import Request
from mhs.http.response import Response

logger = logging.getLogger("mhs.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a ``<status> <detail>`` response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    body = f"{exc.status} {exc.detail}".rstrip() + "\n"
    response = Response(body=body, status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request) -> Response:  # noqa: ARG001
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)
    return Response(body="Internal Server Error", status=500)
