"""Routing — response-template classification and longest-prefix dispatch.

Bindings are classified and registered during App setup, then compiled
into an immutable lookup structure when the app freezes.
"""

from mhs.routing.route import Route, RouteMatch
from mhs.routing.router import Router, clean_path
from mhs.routing.templates import Binding, Kind, classify, classify_all

__all__ = [
    "Binding",
    "Kind",
    "Route",
    "RouteMatch",
    "Router",
    "classify",
    "classify_all",
    "clean_path",
]
