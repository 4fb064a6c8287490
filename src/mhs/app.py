"""mhs application class.

Mutable during setup (middleware registration).
Frozen at runtime when app.run() or __call__() is first invoked:
bindings are classified, handlers built, and the router compiled.
"""

import dataclasses
import logging
import threading
from collections.abc import Callable
from typing import Any

from mhs._internal.asgi import Receive, Scope, Send
from mhs.config import ServerConfig
from mhs.errors import ConfigurationError
from mhs.middleware.cors import CORSMiddleware
from mhs.middleware.protocol import Middleware
from mhs.routing.route import Route
from mhs.routing.router import Router, clean_path
from mhs.routing.templates import Binding, classify_all
from mhs.server.access_log import AccessLogMiddleware
from mhs.server.handler import handle_request
from mhs.server.handlers import DirectoryHandler, handler_for

logger = logging.getLogger("mhs.server")


class App:
    """The mhs application.

    Built from a ``ServerConfig``; an ASGI 3 callable::

        app = App(ServerConfig(bindings=(("/ok", "200"), ("/files", "/tmp"))))
        app.run()

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread classifies bindings and compiles the router, even when
        several workers receive their first request at once. After the
        freeze everything the request path reads is immutable.
    """

    __slots__ = (
        "_asgi",
        "_bindings",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_router",
        "config",
    )

    def __init__(self, config: ServerConfig | None = None) -> None:
        self.config: ServerConfig = config or ServerConfig()
        self._middleware_list: list[Middleware] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set by _freeze()
        self._bindings: tuple[Binding, ...] = ()
        self._router: Router | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._asgi: Callable[..., Any] | None = None

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Register a ``(request, next)`` middleware. Outermost first."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def freeze(self) -> None:
        """Classify bindings and compile the route table now."""
        self._ensure_frozen()

    # -- Introspection --

    @property
    def bindings(self) -> tuple[Binding, ...]:
        """Classified bindings, in registration order (freezes the app)."""
        self._ensure_frozen()
        return self._bindings

    @property
    def router(self) -> Router:
        """The compiled route table (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    # -- Serving --

    def run(self) -> None:
        """Freeze the app and serve it until the process is stopped."""
        from mhs.server.run import run_server

        self._ensure_frozen()
        run_server(
            self,
            self.config.host,
            self.config.port,
            ssl_certfile=self.config.cert_path or None,
            ssl_keyfile=self.config.key_path or None,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Lifespan messages are acknowledged (there is nothing to start or
        stop); HTTP scopes go through the access log and request pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._asgi is not None
        await self._asgi(scope, receive, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol, freezing the app at startup."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except ConfigurationError as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def _dispatch(self, scope: Scope, receive: Receive, send: Send) -> None:
        assert self._router is not None
        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
        )

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Classify bindings, build the route table, compile middleware."""
        self.config.validate()

        router = Router()
        if not self.config.bindings:
            router.add(Route("/", DirectoryHandler("."), name="cwd"))
        else:
            bindings: list[Binding] = []
            for binding in classify_all(self.config.bindings):
                binding = dataclasses.replace(
                    binding, request_path=clean_path(binding.request_path)
                )
                bindings.append(binding)
                router.add(Route(binding.request_path, handler_for(binding)))
                logger.debug(
                    "%s -> %s %s", binding.request_path, binding.kind.value, binding.payload
                )
            self._bindings = tuple(bindings)
        router.compile()

        middleware = list(self._middleware_list)
        if self.config.cors:
            middleware.insert(0, CORSMiddleware())

        self._router = router
        self._middleware = tuple(middleware)
        self._asgi = AccessLogMiddleware(self._dispatch)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify the app after it has started serving."
            raise ConfigurationError(msg)
