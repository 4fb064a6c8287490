"""Tests for mhs.server.run — pounce wiring and fatal transport errors."""

import logging
import socket
import ssl
from unittest.mock import MagicMock, patch

import pytest

from mhs.server.run import ALL_INTERFACES, check_tls_material, run_server


@pytest.fixture
def pounce():
    with (
        patch("pounce.config.ServerConfig") as config_cls,
        patch("pounce.server.Server") as server_cls,
    ):
        yield config_cls, server_cls


class TestRunServer:
    def test_plain_http(self, pounce) -> None:
        config_cls, server_cls = pounce
        app = object()
        run_server(app, "", 8080)
        config_cls.assert_called_once_with(
            host=ALL_INTERFACES,
            port=8080,
            workers=1,
            reload=False,
            ssl_certfile=None,
            ssl_keyfile=None,
        )
        server_cls.assert_called_once_with(config_cls.return_value, app)
        server_cls.return_value.run.assert_called_once_with()

    def test_explicit_host_kept(self, pounce) -> None:
        config_cls, _ = pounce
        run_server(object(), "127.0.0.1", 9000)
        assert config_cls.call_args.kwargs["host"] == "127.0.0.1"

    def test_tls_material_loaded_first(self, pounce) -> None:
        config_cls, _ = pounce
        with patch("mhs.server.run.check_tls_material") as check:
            run_server(object(), "", 8443, ssl_certfile="c.pem", ssl_keyfile="k.pem")
        check.assert_called_once_with("c.pem", "k.pem")
        assert config_cls.call_args.kwargs["ssl_certfile"] == "c.pem"
        assert config_cls.call_args.kwargs["ssl_keyfile"] == "k.pem"

    def test_missing_certificate_is_fatal(
        self, pounce, tmp_path, caplog: pytest.LogCaptureFixture
    ) -> None:
        _, server_cls = pounce
        with pytest.raises(SystemExit) as exc_info:
            run_server(
                object(),
                "",
                8443,
                ssl_certfile=str(tmp_path / "missing.pem"),
                ssl_keyfile=str(tmp_path / "missing.key"),
            )
        assert exc_info.value.code == 1
        server_cls.assert_not_called()
        assert [r.levelno for r in caplog.records] == [logging.CRITICAL]

    def test_malformed_certificate_is_fatal(self, pounce, tmp_path) -> None:
        _, server_cls = pounce
        cert = tmp_path / "cert.pem"
        key = tmp_path / "key.pem"
        cert.write_text("not a certificate")
        key.write_text("not a key")
        with pytest.raises(SystemExit) as exc_info:
            run_server(object(), "", 8443, ssl_certfile=str(cert), ssl_keyfile=str(key))
        assert exc_info.value.code == 1
        server_cls.assert_not_called()

    def test_bind_failure_is_fatal(self, pounce, caplog: pytest.LogCaptureFixture) -> None:
        _, server_cls = pounce
        server_cls.return_value.run.side_effect = OSError(98, "Address already in use")
        with pytest.raises(SystemExit) as exc_info:
            run_server(object(), "", 8080)
        assert exc_info.value.code == 1
        assert "Address already in use" in caplog.text


class TestAllInterfaces:
    @pytest.mark.skipif(not socket.has_ipv6, reason="no IPv6 support")
    def test_empty_host_is_dual_stack(self, pounce) -> None:
        config_cls, _ = pounce
        run_server(object(), "", 8080)
        assert config_cls.call_args.kwargs["host"] == "::"

    @pytest.mark.skipif(socket.has_ipv6, reason="IPv6 available")
    def test_empty_host_without_ipv6(self, pounce) -> None:
        config_cls, _ = pounce
        run_server(object(), "", 8080)
        assert config_cls.call_args.kwargs["host"] == "0.0.0.0"


class TestCheckTLSMaterial:
    def test_loads_chain_into_server_context(self) -> None:
        context = MagicMock()
        with patch("mhs.server.run.ssl.SSLContext", return_value=context) as ctx_cls:
            assert check_tls_material("c.pem", "k.pem") is None
        ctx_cls.assert_called_once_with(ssl.PROTOCOL_TLS_SERVER)
        context.load_cert_chain.assert_called_once_with("c.pem", "k.pem")

    def test_missing_files_raise(self, tmp_path) -> None:
        with pytest.raises(OSError):
            check_tls_material(str(tmp_path / "c.pem"), str(tmp_path / "k.pem"))
