"""Return-value conversion for plain handler functions.

``method_func`` accepts functions that return something other than a
``Response``. isinstance-based dispatch, nothing implicit.
"""

import json as json_module
from typing import Any

from perch.http.response import Response


def to_response(value: Any) -> Response:
    """Convert a handler's return value to a Response.

    Dispatch order:

    1. ``Response``             -> pass through
    2. ``str``                  -> 200, text/plain
    3. ``bytes``                -> 200, application/octet-stream
    4. ``dict`` / ``list``      -> 200, application/json
    5. ``(value, int)``         -> convert value, override status
    6. ``(value, int, dict)``   -> convert value, override status + headers
    """
    match value:
        case Response():
            return value
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type="application/json; charset=utf-8",
            )
        case (inner, int() as status):
            return to_response(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return to_response(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, dict, list, or Response."
            )
            raise TypeError(msg)
