"""Tests for perch.errors: exception hierarchy and error messages."""

import pytest

from perch.errors import (
    ConfigurationError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    PerchError,
    RouteConflict,
)


class TestHierarchy:
    def test_http_error_is_perch_error(self) -> None:
        assert issubclass(HTTPError, PerchError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_method_not_allowed_is_http_error(self) -> None:
        assert issubclass(MethodNotAllowed, HTTPError)

    def test_route_conflict_is_configuration_error(self) -> None:
        assert issubclass(RouteConflict, ConfigurationError)
        assert issubclass(ConfigurationError, PerchError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request body")) == "400: Bad request body"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_default_empty_headers(self) -> None:
        assert HTTPError(status=400).headers == ()


class TestNotFound:
    def test_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"

    def test_custom_detail(self) -> None:
        assert NotFound("No user 7").detail == "No user 7"


class TestMethodNotAllowed:
    def test_allow_header_is_sorted(self) -> None:
        err = MethodNotAllowed(frozenset({"POST", "GET"}))
        assert err.status == 405
        assert err.headers == (("Allow", "GET, POST"),)
        assert err.detail == "Method not allowed. Allowed methods: GET, POST"

    def test_custom_detail(self) -> None:
        err = MethodNotAllowed(frozenset({"GET"}), detail="read only")
        assert err.detail == "read only"
        assert err.headers == (("Allow", "GET"),)


class TestRouteConflict:
    def test_message_and_key(self) -> None:
        err = RouteConflict("GET /users")
        assert err.key == "GET /users"
        assert str(err) == "Route already registered: 'GET /users'"
