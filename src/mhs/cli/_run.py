"""Start serving a parsed configuration."""

from mhs.app import App
from mhs.config import ServerConfig
from mhs.log import configure_logging


def serve(config: ServerConfig) -> None:
    """Configure logging, build the App, announce it, and serve forever."""
    configure_logging()
    app = App(config)
    app.freeze()
    print(config.startup_message(), flush=True)
    app.run()
