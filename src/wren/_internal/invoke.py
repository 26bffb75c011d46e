"""Invoke helpers — call sync or async callables uniformly.

Submit handlers and duplicate checkers can be ``def`` or ``async def``.
Any code that calls a user-provided callable must handle both cases.
This module keeps the sync/async check in exactly one place.

Usage::

    from wren._internal.invoke import invoke

    result = await invoke(on_valid, values)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync — returns immediately, no await needed
        def save(values):
            store.append(values)

        # async — returns coroutine, awaited automatically
        async def save(values):
            await api.post("/users", json=values)
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
