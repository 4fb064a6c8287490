"""mhs — a minimal HTTP(S) server for development and testing.

Serve the current directory, or bind request paths to canned responses:
a status code, a directory tree, or a single file::

    mhs                               # current directory on :8080
    mhs /ok 200 /files /tmp           # status route plus a directory
    mhs -c -p 9000 /page index.html   # one file, with CORS headers

Programmatic use::

    from mhs import App, ServerConfig

    app = App(ServerConfig(bindings=(("/ok", "200"),)))
    app.run()
"""

from mhs.app import App
from mhs.config import ServerConfig
from mhs.errors import ConfigurationError, HTTPError, MhsError, NotFound
from mhs.routing.templates import Binding, Kind, classify

__version__ = "0.1.0"

__all__ = [
    "App",
    "Binding",
    "ConfigurationError",
    "HTTPError",
    "Kind",
    "MhsError",
    "NotFound",
    "ServerConfig",
    "classify",
]
