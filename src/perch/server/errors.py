"""Error rendering for the ASGI entry point.

Maps HTTPError exceptions and unexpected failures to plain Responses.
"""

import logging

from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response

logger = logging.getLogger("perch.server")


def render_http_error(exc: HTTPError, request: Request, *, debug: bool) -> Response:
    """Map an HTTPError to a Response carrying its status and headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    response = Response(body=detail, status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def render_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle an unexpected exception as a 500."""
    logger.exception("500 %s %s", request.method, request.path)

    if debug:
        return Response(body=f"500: {type(exc).__name__}: {exc}", status=500)
    return Response(body="Internal Server Error", status=500)
