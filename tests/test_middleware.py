"""Tests for perch.middleware.protocol: the request/next adapter."""

import pytest

from perch.http.request import Request
from perch.http.response import Response
from perch.middleware import Next, as_middleware
from perch.routing.context import new_router


async def whoami(request: Request) -> Response:
    return Response(f"user={request.value('user')}")


class TestAsMiddleware:
    @pytest.mark.asyncio
    async def test_function_middleware(self) -> None:
        @as_middleware
        async def login(request: Request, next: Next) -> Response:
            return await next(request.with_value("user", "alice"))

        r = new_router()
        r.with_(login).get("/me", whoami)

        response = await r.handle(Request(method="GET", path="/me"))
        assert response.text == "user=alice"

    @pytest.mark.asyncio
    async def test_can_decorate_response(self) -> None:
        @as_middleware
        async def stamp(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("X-Stamp", "1")

        r = new_router()
        r.use(stamp)
        r.get("/me", whoami)

        response = await r.handle(Request(method="GET", path="/me"))
        assert response.header("X-Stamp") == "1"

    @pytest.mark.asyncio
    async def test_can_short_circuit(self) -> None:
        @as_middleware
        async def deny(request: Request, next: Next) -> Response:
            return Response("denied", status=403)

        r = new_router()
        r.with_(deny).get("/admin", whoami)

        response = await r.handle(Request(method="GET", path="/admin"))
        assert response.status == 403

    @pytest.mark.asyncio
    async def test_class_middleware(self) -> None:
        class Tag:
            def __init__(self, value: str) -> None:
                self.value = value

            async def __call__(self, request: Request, next: Next) -> Response:
                return await next(request.with_value("user", self.value))

        r = new_router()
        r.with_(as_middleware(Tag("bob"))).get("/me", whoami)

        response = await r.handle(Request(method="GET", path="/me"))
        assert response.text == "user=bob"

    def test_keeps_name(self) -> None:
        @as_middleware
        async def audit(request: Request, next: Next) -> Response:
            return await next(request)

        assert audit.__name__ == "audit"
