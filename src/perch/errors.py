"""Perch exception hierarchy.

Shared by the match table, the routing contexts, and the ASGI entry point
so every module raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a route cannot be registered as written.

    Surfaces at registration time, before the router serves anything.
    """


class RouteConflict(ConfigurationError):  # noqa: N818
    """The same method and pattern were registered twice."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Route already registered: {key!r}")


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by the match table or by handlers. The ASGI entry point
    catches these and renders them as plain responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: the path is routed, but not for this HTTP method.

    Carries an ``Allow`` header listing the methods that are registered.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
