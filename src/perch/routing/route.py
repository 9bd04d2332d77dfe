"""Route entries, match results, and route-key parsing."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``/users``     (is_param=False)
    Param:   ``/{id}``      (is_param=True, param_name="id")
    Typed:   ``/{id:int}``  (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route: method, full pattern, composed handler.

    ``method`` is ``None`` for routes that match any method.
    """

    method: str | None
    pattern: str
    handler: Any

    @property
    def key(self) -> str:
        """The ``"METHOD /pattern"`` key this route was registered under."""
        if self.method is None:
            return self.pattern
        return f"{self.method} {self.pattern}"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful lookup."""

    route: Route
    path_params: dict[str, str]


def split_key(key: str) -> tuple[str | None, str]:
    """Split a route key into ``(method, pattern)``.

    ``"GET /users"`` -> ``("GET", "/users")``
    ``"/users"``     -> ``(None, "/users")``
    """
    if key and not key.startswith("/"):
        method, sep, pattern = key.partition(" ")
        if sep:
            return method, pattern.lstrip()
    return None, key
