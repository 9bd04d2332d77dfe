"""ASGI handler: the only component that touches raw ASGI messages.

Builds a Request from the scope, runs the router's dispatch, renders
errors, and sends the Response back through ``send()``.
"""

from collections.abc import Awaitable, Callable

from perch._internal.asgi import Receive, Scope, Send
from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.server.errors import render_http_error, render_internal_error
from perch.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatch: Callable[[Request], Awaitable[Response]],
    debug: bool = False,
) -> None:
    """Process one ASGI connection scope."""
    if scope["type"] == "lifespan":
        await _handle_lifespan(receive, send)
        return
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await dispatch(request)
    except HTTPError as exc:
        response = render_http_error(exc, request, debug=debug)
    except Exception as exc:
        response = render_internal_error(exc, request, debug=debug)

    await send_response(response, send, head=request.method == "HEAD")


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge lifespan startup and shutdown.

    The router has nothing to set up: every route was composed and
    installed while it was being configured.
    """
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
