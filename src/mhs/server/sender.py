"""ASGI response sending — translates mhs responses to ASGI messages."""

import anyio

from mhs._internal.asgi import Send
from mhs.http.response import AnyResponse, FileResponse

# Bytes read from disk per ASGI body message
CHUNK_SIZE = 64 * 1024


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _raw_headers(response: AnyResponse, content_length: int) -> list[tuple[bytes, bytes]]:
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    raw_headers.append((b"content-length", str(content_length).encode("latin-1")))
    return raw_headers


async def send_response(response: AnyResponse, send: Send, *, head: bool = False) -> None:
    """Translate an mhs response into ASGI send() calls.

    HEAD responses advertise the full ``content-length`` but carry no body.
    """
    if isinstance(response, FileResponse):
        await send_file_response(response, send, head=head)
        return

    body = response.body_bytes if _body_allowed(response.status) else b""
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _raw_headers(response, len(body)),
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )


async def send_file_response(response: FileResponse, send: Send, *, head: bool = False) -> None:
    """Stream ``response.length`` bytes of a file, ``CHUNK_SIZE`` at a time.

    Sends headers first, then each chunk with ``more_body=True``, and closes
    with an empty body. A file that shrank after it was stat'ed ends the
    body early.
    """
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _raw_headers(response, response.length),
        }
    )

    if not head:
        remaining = response.length
        async with await anyio.open_file(response.path, "rb") as file:
            if response.offset:
                await file.seek(response.offset)
            while remaining > 0:
                chunk = await file.read(min(CHUNK_SIZE, remaining))
                if not chunk:
                    break
                remaining -= len(chunk)
                await send({"type": "http.response.body", "body": chunk, "more_body": True})

    await send({"type": "http.response.body", "body": b"", "more_body": False})

