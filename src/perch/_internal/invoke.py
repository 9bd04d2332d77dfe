"""Invoke helper: call sync or async functions uniformly.

Plain handler functions registered through ``method_func`` may be
``def`` or ``async def``. This keeps the awaitable check in one place.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    Works with both sync and async callables::

        def ping(request):
            return "pong"

        async def user(request):
            return await load_user(request.path_params["id"])
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
