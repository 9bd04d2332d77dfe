"""Perch: a composable ASGI request router.

Routes perch on a tree of routing contexts. Each context carries a path
prefix and a middleware chain; all of them share one match table.

Basic usage::

    from perch import new_router

    router = new_router()
    router.use(request_id)

    @router.get("/health")
    def health(request):
        return "ok"

    def v1(r):
        r.use(auth)
        r.get("/me", me)

    router.route("/v1", v1)

The router is an ASGI application; serve it with any ASGI server, or
with ``router.run()`` (``pip install perch[server]``).
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "HTTPError",
    "Handler",
    "MatchTable",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "PerchError",
    "Request",
    "Response",
    "RouteConflict",
    "Router",
    "RouterConfig",
    "TrieTable",
    "as_middleware",
    "new_router",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import perch`` cheap while providing a flat top-level API.
    """
    if name in ("Router", "new_router"):
        from perch.routing import context as _context

        return getattr(_context, name)

    if name in ("MatchTable", "TrieTable"):
        from perch.routing import table as _table

        return getattr(_table, name)

    if name == "RouterConfig":
        from perch.config import RouterConfig

        return RouterConfig

    if name in ("Request", "Response"):
        from perch import http as _http

        return getattr(_http, name)

    if name in ("Handler", "Middleware", "Next", "as_middleware"):
        from perch.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "PerchError",
        "RouteConflict",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
