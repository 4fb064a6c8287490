"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mhs.http.request import Request
from mhs.http.response import AnyResponse

type Handler = Callable[[Request], Awaitable[AnyResponse]]


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    A path ending in ``/`` names a subtree; any other path matches exactly.
    """

    path: str
    handler: Handler
    name: str | None = None

    @property
    def is_subtree(self) -> bool:
        return self.path.endswith("/")


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path: str
