"""Server configuration.

ServerConfig is a frozen dataclass — built once from the command line,
immutable thereafter, passed into the App and never mutated.
"""

from dataclasses import dataclass

from mhs.errors import ConfigurationError

DEFAULT_PORT = 8080


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(port=9000, bindings=(("/ok", "200"),))
    """

    # Listener
    host: str = ""  # "" binds every interface (":<port>")
    port: int = DEFAULT_PORT

    # Emit the cross-origin header set on every response
    cors: bool = False

    # TLS (both or neither)
    cert_path: str = ""
    key_path: str = ""

    # Ordered (request_path, response_template) pairs
    bindings: tuple[tuple[str, str], ...] = ()

    @property
    def tls(self) -> bool:
        """True when both certificate and key are configured."""
        return bool(self.cert_path and self.key_path)

    @property
    def scheme(self) -> str:
        return "HTTPS" if self.tls else "HTTP"

    def validate(self) -> None:
        """Raise ``ConfigurationError`` for settings that cannot be served.

        TLS material must be given as a pair: a certificate without a key
        (or the reverse) would only fail later, at handshake time.
        """
        if bool(self.cert_path) != bool(self.key_path):
            missing = "-k (TLS key)" if self.cert_path else "-s (TLS certificate)"
            msg = f"TLS requires both a certificate and a key; missing {missing}"
            raise ConfigurationError(msg)
        if not 0 <= self.port <= 65535:
            msg = f"Port {self.port} is outside the range 0-65535"
            raise ConfigurationError(msg)
        for binding in self.bindings:
            if len(binding) != 2:
                msg = f"Binding {binding!r} is not a (request path, response template) pair"
                raise ConfigurationError(msg)

    def startup_message(self) -> str:
        """The one informational line printed before serving."""
        if not self.bindings:
            return f"Serving current directory via {self.scheme} on port {self.port}"
        return f"Serving {self.scheme} on port {self.port}"
