"""End-to-end scenarios over a real HTTP client.

The App is driven through ``httpx.ASGITransport``, so requests take the
same path they would behind pounce: ASGI scope in, access log, routing,
handlers, response messages out.
"""

import logging

import httpx
import pytest

from mhs.app import App
from mhs.cli import PAIRS_MESSAGE, main, parse_config


def _client(app: App) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


class TestScenarios:
    async def test_share_current_directory(
        self, tmp_path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="mhs.access")
        (tmp_path / "hello.txt").write_text("hello")
        monkeypatch.chdir(tmp_path)
        config = parse_config(["-p", "9000"])
        async with _client(App(config)) as client:
            response = await client.get("/hello.txt")
        assert response.status_code == 200
        assert response.text == "hello"
        assert "GET /hello.txt - 200" in caplog.text

    async def test_canned_statuses(self) -> None:
        app = App(parse_config(["/ok", "200", "/error", "500"]))
        async with _client(app) as client:
            ok = await client.get("/ok")
            error = await client.get("/error")
            missing = await client.get("/missing")
        assert (ok.status_code, ok.text) == (200, "OK")
        assert (error.status_code, error.text) == (500, "Internal Server Error")
        assert missing.status_code == 404
        assert missing.text == "404 page not found\n"

    async def test_directory_under_prefix(self, tmp_path) -> None:
        (tmp_path / "a.txt").write_text("contents of a")
        app = App(parse_config(["/files", str(tmp_path)]))
        assert app.bindings[0].request_path == "/files/"
        async with _client(app) as client:
            file_response = await client.get("/files/a.txt")
            listing = await client.get("/files/")
        assert file_response.status_code == 200
        assert file_response.text == "contents of a"
        assert listing.status_code == 200
        assert listing.headers["content-type"].startswith("text/html")
        assert 'href="a.txt"' in listing.text

    async def test_file_created_after_startup(
        self, tmp_path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        app = App(parse_config(["/page", "./index.html"]))
        app.freeze()
        async with _client(app) as client:
            before = await client.get("/page")
            (tmp_path / "index.html").write_text("<h1>late</h1>")
            after = await client.get("/page")
        assert before.status_code == 404
        assert after.status_code == 200
        assert after.text == "<h1>late</h1>"

    async def test_cross_origin_headers(self) -> None:
        app = App(parse_config(["-c", "/ok", "200"]))
        async with _client(app) as client:
            response = await client.get("/ok")
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-headers"] == "Content-Type"
        assert response.headers["cross-origin-embedder-policy"] == "require-corp"
        assert response.headers["cross-origin-opener-policy"] == "same-origin"

    def test_odd_positionals(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["/a", "200", "/b"])
        assert exc_info.value.code != 0
        assert PAIRS_MESSAGE in capsys.readouterr().out
