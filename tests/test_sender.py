"""Tests for mhs.server.sender response emission rules."""

import pytest

from mhs.http.response import AnyResponse, FileResponse, Response
from mhs.server import sender
from mhs.server.sender import send_response


async def _emit(response: AnyResponse, *, head: bool = False) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send, head=head)
    return messages


def _body(messages: list[dict]) -> bytes:
    return b"".join(m.get("body", b"") for m in messages if m["type"] == "http.response.body")


class TestSendResponse:
    async def test_start_then_body(self) -> None:
        messages = await _emit(Response("hello").with_header("X-Thing", "1"))
        assert [m["type"] for m in messages] == ["http.response.start", "http.response.body"]
        assert messages[0]["status"] == 200
        assert messages[0]["headers"] == [
            (b"content-type", b"text/plain; charset=utf-8"),
            (b"x-thing", b"1"),
            (b"content-length", b"5"),
        ]
        assert messages[1]["body"] == b"hello"

    async def test_utf8_content_length(self) -> None:
        messages = await _emit(Response("héllo"))
        assert dict(messages[0]["headers"])[b"content-length"] == b"6"

    @pytest.mark.parametrize("status", [101, 204, 304])
    async def test_no_body_statuses(self, status: int) -> None:
        # Even if a handler attaches body content, these statuses carry none
        messages = await _emit(Response("unexpected-body", status=status))
        assert dict(messages[0]["headers"])[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_head_keeps_length_drops_body(self) -> None:
        messages = await _emit(Response("hello"), head=True)
        assert dict(messages[0]["headers"])[b"content-length"] == b"5"
        assert messages[1]["body"] == b""


class TestSendFileResponse:
    async def test_streams_whole_file(self, tmp_path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"0123456789")
        messages = await _emit(FileResponse(path=path, length=10, content_type="text/plain"))
        assert dict(messages[0]["headers"])[b"content-length"] == b"10"
        assert _body(messages) == b"0123456789"
        assert messages[-1] == {"type": "http.response.body", "body": b"", "more_body": False}

    async def test_streams_span(self, tmp_path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"0123456789")
        messages = await _emit(FileResponse(path=path, offset=3, length=4, status=206))
        assert messages[0]["status"] == 206
        assert dict(messages[0]["headers"])[b"content-length"] == b"4"
        assert _body(messages) == b"3456"

    async def test_chunked_reads(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sender, "CHUNK_SIZE", 4)
        path = tmp_path / "a.txt"
        path.write_bytes(b"0123456789")
        messages = await _emit(FileResponse(path=path, length=10))
        chunks = [m["body"] for m in messages[1:-1]]
        assert chunks == [b"0123", b"4567", b"89"]
        assert all(m["more_body"] for m in messages[1:-1])

    async def test_head_sends_no_bytes(self, tmp_path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"0123456789")
        messages = await _emit(FileResponse(path=path, length=10), head=True)
        assert dict(messages[0]["headers"])[b"content-length"] == b"10"
        assert _body(messages) == b""

    async def test_file_shrunk_ends_early(self, tmp_path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"abc")
        messages = await _emit(FileResponse(path=path, length=10))
        assert _body(messages) == b"abc"
        assert messages[-1]["more_body"] is False
