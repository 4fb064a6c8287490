"""Compiled router with longest-prefix path matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.

Matching follows the conventions of a standard path multiplexer:

- a pattern without a trailing slash matches that path exactly;
- a pattern ending in ``/`` matches its whole subtree, and the longest
  matching subtree wins;
- a request naming a subtree root without its trailing slash is
  redirected to the slash form;
- request paths containing ``.``, ``..`` or repeated slashes are
  redirected to their cleaned form.
"""

import posixpath
import re

from mhs.errors import MovedPermanently, NotFound
from mhs.routing.route import Route, RouteMatch

_SLASHES = re.compile(r"/{2,}")


def clean_path(path: str) -> str:
    """Return the canonical form of a URL path.

    Examples::

        ""              -> "/"
        "files"         -> "/files"
        "/a//b/./c/.."  -> "/a/b"
        "/files/"       -> "/files/"   (trailing slash kept)
        "/../etc"       -> "/etc"
    """
    if not path:
        return "/"
    if not path.startswith("/"):
        path = "/" + path
    cleaned = posixpath.normpath(_SLASHES.sub("/", path))
    # normpath keeps a leading "//" and never a trailing slash
    cleaned = "/" + cleaned.lstrip("/")
    if path.endswith("/") and cleaned != "/":
        cleaned += "/"
    return cleaned


class Router:
    """Compiled router with longest-prefix matching.

    Usage::

        router = Router()
        router.add(Route("/ok", handler))
        router.add(Route("/files/", files_handler))
        router.compile()
        match = router.match("/files/a.txt")

    Registering the same path twice replaces the earlier route.
    """

    __slots__ = ("_compiled", "_exact", "_subtrees")

    def __init__(self) -> None:
        self._exact: dict[str, Route] = {}
        # Subtree patterns, longest first once compiled
        self._subtrees: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._exact[route.path] = route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._exact.values())

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        subtrees = [route for route in self._exact.values() if route.is_subtree]
        self._subtrees = sorted(subtrees, key=lambda route: len(route.path), reverse=True)
        self._compiled = True

    def match(self, path: str, query: bytes = b"") -> RouteMatch:
        """Match a request path against the compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``MovedPermanently`` when the path should be requested
        in another form (keeping *query*), and ``NotFound`` if no route matches.
        """
        cleaned = clean_path(path)
        if cleaned != path:
            raise MovedPermanently(cleaned, query)

        route = self._exact.get(path)
        if route is not None:
            return RouteMatch(route=route, path=path)

        if not path.endswith("/") and (path + "/") in self._exact:
            raise MovedPermanently(path + "/", query)

        for route in self._subtrees:
            if path.startswith(route.path):
                return RouteMatch(route=route, path=path)

        raise NotFound()
