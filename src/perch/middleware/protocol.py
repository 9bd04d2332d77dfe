"""Handler and Middleware shapes.

A handler is any async callable taking a Request::

    async def handler(request: Request) -> Response: ...

A middleware is a function from handler to handler::

    def stamp(next: Handler) -> Handler:
        async def wrapped(request: Request) -> Response:
            response = await next(request)
            return response.with_header("X-Stamp", "1")
        return wrapped

No base class required. The router checks the shape, not the lineage.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Protocol, TypeAlias

from perch.http.request import Request
from perch.http.response import Response

# The composed unit the match table stores and invokes
Handler: TypeAlias = Callable[[Request], Awaitable[Response]]

# A transformation wrapped around a handler at registration time
Middleware: TypeAlias = Callable[[Handler], Handler]

# The inner handler as seen by a request/next style middleware
Next: TypeAlias = Handler


class NextMiddleware(Protocol):
    """A middleware written in request/next style.

    Accepts both functions and callable objects::

        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            return response.with_header("X-Time", f"{time.monotonic() - start:.3f}")
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...


def as_middleware(func: NextMiddleware) -> Middleware:
    """Adapt a request/next style callable into a handler-wrapping middleware.

    Usage::

        @as_middleware
        async def tag(request, next):
            return await next(request.with_value("tag", "on"))

        router.use(tag)
    """

    def wrap(next: Handler) -> Handler:
        async def handler(request: Request) -> Response:
            return await func(request, next)

        return handler

    return wraps(func)(wrap)
