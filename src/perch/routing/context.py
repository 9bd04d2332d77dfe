"""Routing contexts: scoped middleware over one shared match table.

A root context comes from ``new_router()``. ``with_()``, ``group()`` and
``route()`` derive child contexts that share the root's table but carry
their own prefix and their own copy of the middleware chain.

Middleware is composed when a route is registered, not when a request
arrives: the chain current at registration time is wrapped around the
handler and the result is stored in the table. Dispatch is then a single
lookup, however deep the configuration tree was.

Configuration is single-threaded setup work. Once serving starts the
table and every composed handler are read-only.
"""

from collections.abc import Callable, Iterable
from functools import wraps
from typing import Any, TypeVar

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import invoke
from perch.config import RouterConfig
from perch.http.negotiation import to_response
from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import Handler, Middleware
from perch.routing.route import Route
from perch.routing.table import MatchTable, TrieTable
from perch.server.handler import handle_request

F = TypeVar("F", bound=Callable[..., Any])


class Router:
    """A routing context: prefix + middleware chain + shared match table.

    Usage::

        router = new_router()
        router.use(request_id)

        @router.get("/health")
        def health(request):
            return "ok"

        router.route("/v1", lambda r: (r.use(auth), r.get("/me", me)))

    The router is an ASGI application. Passed as a handler to another
    router it is mounted through ``router.handle``, so a configured router
    can be nested inside another one unmodified.
    """

    __slots__ = ("_middleware", "_prefix", "config", "table")

    def __init__(
        self,
        table: MatchTable | None = None,
        *,
        prefix: str = "",
        middleware: Iterable[Middleware] = (),
        config: RouterConfig | None = None,
    ) -> None:
        self.table: MatchTable = table if table is not None else TrieTable()
        self.config: RouterConfig = config or RouterConfig()
        self._prefix = prefix
        # Always a private copy; never aliased with another context's list
        self._middleware: list[Middleware] = list(middleware)

    def __repr__(self) -> str:
        return f"<Router prefix={self._prefix!r} middleware={len(self._middleware)}>"

    @property
    def prefix(self) -> str:
        """Path prefix accumulated from enclosing ``route()`` calls."""
        return self._prefix

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """This context's middleware chain, outermost first."""
        return tuple(self._middleware)

    @property
    def routes(self) -> tuple[Route, ...]:
        """Every route in the shared table, in registration order."""
        return self.table.routes

    # -- Middleware accumulation --

    def use(self, *middleware: Middleware) -> None:
        """Append middleware to this context's chain.

        Only routes registered on this context afterwards are wrapped.
        Routes already registered keep the handler they were composed with,
        and contexts already derived from this one are unaffected.
        """
        self._middleware.extend(middleware)

    def with_(self, *middleware: Middleware) -> "Router":
        """Return a derived context with inline middleware for a few routes.

        The receiver's chain is left untouched::

            router.with_(admin_only).delete("/users/{id}", delete_user)
        """
        return self._derive(self._prefix, middleware)

    def group(self, fn: Callable[["Router"], Any] | None = None) -> "Router":
        """Open a nested scope on the same prefix.

        *fn* receives the derived context and may add middleware and routes
        to it; nothing it adds is visible on the receiver. The configured
        context is returned so callers can keep registering on it.
        """
        child = self._derive(self._prefix)
        if fn is not None:
            fn(child)
        return child

    def route(self, pattern: str, fn: Callable[["Router"], Any] | None = None) -> "Router":
        """Like ``group()``, with *pattern* appended to the prefix.

        The prefix is concatenated as-is; ``route("/v1/")`` followed by
        ``get("/x")`` registers ``/v1//x``.
        """
        child = self._derive(self._prefix + pattern)
        if fn is not None:
            fn(child)
        return child

    def _derive(self, prefix: str, extra: Iterable[Middleware] = ()) -> "Router":
        return Router(
            self.table,
            prefix=prefix,
            middleware=(*self._middleware, *extra),
            config=self.config,
        )

    # -- Registration --

    def method(
        self,
        method: str,
        pattern: str,
        handler: "Handler | Router | None" = None,
    ) -> Callable[[F], F] | None:
        """Register *handler* for *method* at ``prefix + pattern``.

        The current chain is wrapped around the handler right to left, so
        the first middleware added runs first. An empty *method* matches
        any method. Called without a handler, returns a decorator.

        A ``Router`` passed as the handler is mounted through its
        ``handle`` method.
        """
        if handler is None:

            def decorator(func: F) -> F:
                self.method(method, pattern, func)
                return func

            return decorator

        if isinstance(handler, Router):
            handler = handler.handle

        for mw in reversed(self._middleware):
            handler = mw(handler)

        path = f"{self._prefix}{pattern}"
        key = f"{method} {path}" if method else path
        self.table.register(key, handler)
        return None

    def method_func(
        self,
        method: str,
        pattern: str,
        func: Callable[..., Any] | None = None,
    ) -> Callable[[F], F] | None:
        """Register a plain function as a handler.

        *func* takes the request and may be sync or async. It may return a
        ``Response`` or a value ``to_response()`` understands (``str``,
        ``bytes``, ``dict``, ``list``, ``(value, status)``).
        """
        if func is None:

            def decorator(fn: F) -> F:
                self.method_func(method, pattern, fn)
                return fn

            return decorator

        if isinstance(func, Router):
            return self.method(method, pattern, func)
        return self.method(method, pattern, _as_handler(func))

    def connect(self, pattern: str, func: Callable[..., Any] | None = None) -> Any:
        """Register a CONNECT route."""
        return self.method_func("CONNECT", pattern, func)

    def delete(self, pattern: str, func: Callable[..., Any] | None = None) -> Any:
        """Register a DELETE route."""
        return self.method_func("DELETE", pattern, func)

    def get(self, pattern: str, func: Callable[..., Any] | None = None) -> Any:
        """Register a GET route."""
        return self.method_func("GET", pattern, func)

    def head(self, pattern: str, func: Callable[..., Any] | None = None) -> Any:
        """Register a HEAD route."""
        return self.method_func("HEAD", pattern, func)

    def options(self, pattern: str, func: Callable[..., Any] | None = None) -> Any:
        """Register an OPTIONS route."""
        return self.method_func("OPTIONS", pattern, func)

    def patch(self, pattern: str, func: Callable[..., Any] | None = None) -> Any:
        """Register a PATCH route."""
        return self.method_func("PATCH", pattern, func)

    def post(self, pattern: str, func: Callable[..., Any] | None = None) -> Any:
        """Register a POST route."""
        return self.method_func("POST", pattern, func)

    def put(self, pattern: str, func: Callable[..., Any] | None = None) -> Any:
        """Register a PUT route."""
        return self.method_func("PUT", pattern, func)

    def trace(self, pattern: str, func: Callable[..., Any] | None = None) -> Any:
        """Register a TRACE route."""
        return self.method_func("TRACE", pattern, func)

    # -- Dispatch --

    async def handle(self, request: Request) -> Response:
        """Look up and invoke the composed handler for *request*.

        Raises ``NotFound`` or ``MethodNotAllowed`` from the table; the
        ASGI entry point turns those into responses.
        """
        match = self.table.match(request.method, request.path)
        return await match.route.handler(request.with_path_params(match.path_params))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        await handle_request(scope, receive, send, dispatch=self.handle, debug=self.config.debug)

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve this router with pounce (``pip install perch[server]``)."""
        from perch.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.reload,
        )


def _as_handler(func: Callable[..., Any]) -> Handler:
    @wraps(func)
    async def handler(request: Request) -> Response:
        return to_response(await invoke(func, request))

    return handler


def new_router(config: RouterConfig | None = None) -> Router:
    """Create a root routing context with a fresh match table."""
    return Router(config=config)
