"""Static file serving.

The serve-file primitive shared by directory and single-file bindings.
Handles content types, ``Last-Modified`` / ``If-Modified-Since``, single
byte ranges, ``index.html`` resolution, trailing-slash redirects, and HTML
directory listings. Errors are raised as ``HTTPError`` subclasses and
turned into responses by the request pipeline.

File I/O goes through ``anyio.Path`` and ``anyio.open_file`` so disk
access never blocks the event loop; file bodies are streamed by the sender
rather than read here.
"""

import mimetypes
import os
import re
import stat
from dataclasses import dataclass
from email.utils import formatdate, parsedate_to_datetime
from pathlib import Path
from urllib.parse import quote

import anyio
from kida import Environment

from mhs.errors import Forbidden, MovedPermanently, NotFound, RangeNotSatisfiable
from mhs.http.request import Request
from mhs.http.response import AnyResponse, FileResponse, Response

INDEX_FILE = "index.html"

_RANGE = re.compile(r"bytes=(\d*)-(\d*)")

_LISTING_SOURCE = """<!doctype html>
<meta name="viewport" content="width=device-width">
<pre>
{% for entry in entries %}<a href="{{ entry.href }}">{{ entry.name }}</a>
{% end %}</pre>
"""

_listing_template = Environment(autoescape=True).from_string(_LISTING_SOURCE)


@dataclass(frozen=True, slots=True)
class ListingEntry:
    """One row of a directory listing."""

    name: str
    href: str


async def _stat(path: Path) -> os.stat_result:
    """Stat *path*, mapping filesystem errors to HTTP errors."""
    try:
        return await anyio.Path(path).stat()
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise NotFound() from exc
    except PermissionError as exc:
        raise Forbidden() from exc


async def _check_readable(path: Path) -> None:
    """Open and close *path* so read errors surface before headers are sent."""
    try:
        async with await anyio.open_file(path, "rb"):
            pass
    except FileNotFoundError as exc:
        raise NotFound() from exc
    except PermissionError as exc:
        raise Forbidden() from exc


def _not_modified(request: Request, mtime: float) -> bool:
    """True when the client's ``If-Modified-Since`` covers *mtime*."""
    header = request.headers.get("if-modified-since")
    if not header:
        return False
    try:
        since = parsedate_to_datetime(header)
    except (TypeError, ValueError):
        return False
    return int(mtime) <= since.timestamp()


def parse_range(header: str | None, size: int) -> tuple[int, int] | None:
    """Resolve a ``Range`` header against a file of *size* bytes.

    Returns the inclusive ``(first, last)`` byte positions of a single
    range, or ``None`` to send the whole file: no header, a unit other
    than ``bytes``, several ranges, or a malformed value.

    Raises ``RangeNotSatisfiable`` when the range cannot overlap the file.
    """
    if not header:
        return None
    match = _RANGE.fullmatch(header.strip())
    if match is None:
        return None
    first, last = match.groups()

    if not first:
        if not last:
            return None
        # Suffix form: the final N bytes
        suffix = int(last)
        if suffix == 0 or size == 0:
            raise RangeNotSatisfiable(size)
        return max(size - suffix, 0), size - 1

    start = int(first)
    end = int(last) if last else size - 1
    if start >= size or end < start:
        raise RangeNotSatisfiable(size)
    return start, min(end, size - 1)


async def send_file(request: Request, path: Path, info: os.stat_result) -> AnyResponse:
    """Build a response for the regular file at *path*.

    The body is streamed from disk by the sender; a ``Range`` request gets
    ``206 Partial Content`` with only the requested bytes.
    """
    last_modified = formatdate(info.st_mtime, usegmt=True)
    if _not_modified(request, info.st_mtime):
        return Response(status=304).with_header("Last-Modified", last_modified)

    size = info.st_size
    byte_range = parse_range(request.headers.get("range"), size)
    await _check_readable(path)

    content_type, _ = mimetypes.guess_type(path.name)
    response = FileResponse(
        path=path,
        length=size,
        content_type=content_type or "application/octet-stream",
        headers=(("Last-Modified", last_modified), ("Accept-Ranges", "bytes")),
    )
    if byte_range is None:
        return response

    first, last = byte_range
    return FileResponse(
        path=path,
        offset=first,
        length=last - first + 1,
        status=206,
        content_type=response.content_type,
        headers=response.headers,
    ).with_header("Content-Range", f"bytes {first}-{last}/{size}")


async def list_directory(path: Path) -> Response:
    """Render an HTML listing of *path*, directories suffixed with ``/``."""
    entries: list[ListingEntry] = []
    try:
        async for child in anyio.Path(path).iterdir():
            name = child.name
            if await child.is_dir():
                name += "/"
            entries.append(ListingEntry(name=name, href=quote(name)))
    except PermissionError as exc:
        raise Forbidden() from exc

    entries.sort(key=lambda entry: entry.name)
    html = _listing_template.render({"entries": entries})
    return Response(body=html, content_type="text/html; charset=utf-8")


async def _index_file(directory: Path, root: Path | None) -> tuple[Path, os.stat_result] | None:
    """The directory's ``index.html`` when it is a regular file inside *root*."""
    index = directory / INDEX_FILE
    try:
        info = await anyio.Path(index).stat()
    except OSError:
        return None
    if not stat.S_ISREG(info.st_mode):
        return None
    if root is not None:
        resolved = Path(await anyio.Path(index).resolve())
        if not resolved.is_relative_to(root):
            return None
    return index, info


async def serve_path(
    request: Request,
    path: Path,
    *,
    root: Path | None = None,
    redirect_index: bool = True,
) -> AnyResponse:
    """Serve the file or directory at *path* for *request*.

    - a directory requested without a trailing slash is redirected to the
      slash form;
    - a directory with an ``index.html`` serves that file, otherwise a
      listing; with *root*, an index that resolves outside it counts as
      absent;
    - with *redirect_index*, a request ending in ``/index.html`` is
      redirected to its directory.

    Redirects keep the request's query string.
    """
    if redirect_index and request.path.endswith("/" + INDEX_FILE):
        raise MovedPermanently(request.path[: -len(INDEX_FILE)], request.query_string)

    info = await _stat(path)

    if stat.S_ISDIR(info.st_mode):
        if not request.path.endswith("/"):
            raise MovedPermanently(request.path + "/", request.query_string)
        index = await _index_file(path, root)
        if index is None:
            return await list_directory(path)
        return await send_file(request, *index)

    if not stat.S_ISREG(info.st_mode):
        raise NotFound()

    return await send_file(request, path, info)
