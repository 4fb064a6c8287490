"""Serving loop.

Starts a pounce ASGI server with the live mhs App object: one worker,
no reload, plain TCP or TLS depending on the configuration.
"""

import logging
import socket
import ssl

logger = logging.getLogger("mhs.server")

# Host for "every interface": "::" accepts IPv4 as well on dual-stack systems
ALL_INTERFACES = "::" if socket.has_ipv6 else "0.0.0.0"


def check_tls_material(certfile: str, keyfile: str) -> None:
    """Fail fast on a certificate/key pair pounce would reject later.

    Raises ``OSError`` for unreadable files and ``ssl.SSLError`` for
    malformed material, before any port is bound.
    """
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(certfile, keyfile)


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    ssl_certfile: str | None = None,
    ssl_keyfile: str | None = None,
) -> None:
    """Serve *app* on ``host:port`` until the process is stopped.

    Args:
        app: ASGI callable (mhs App instance).
        host: Bind host address (``""`` for every interface).
        port: Bind port number.
        ssl_certfile: Path to TLS certificate file (enables HTTPS).
        ssl_keyfile: Path to TLS private key file.

    Bind and TLS failures are fatal: they are logged and the process
    exits with status 1.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    try:
        if ssl_certfile and ssl_keyfile:
            check_tls_material(ssl_certfile, ssl_keyfile)

        config = ServerConfig(
            host=host or ALL_INTERFACES,
            port=port,
            workers=1,
            reload=False,
            ssl_certfile=ssl_certfile or None,
            ssl_keyfile=ssl_keyfile or None,
        )
        server = Server(config, app)
        server.run()
    except OSError as exc:  # ssl.SSLError included
        logger.critical("%s", exc)
        raise SystemExit(1) from exc
