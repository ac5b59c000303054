"""Invoke helper — call sync or async middleware uniformly.

Trellis middleware can be ``def`` or ``async def``. The composition
engine is the only caller of user middleware, and it goes through
this helper so the sync/async check lives in exactly one place.

Usage::

    from trellis._internal.invoke import invoke

    result = await invoke(middleware, ctx, next)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a function and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: already a result
        def stamp(ctx, next):
            ctx.set_header("X-Stamp", "1")

        # async: a coroutine to await
        async def timing(ctx, next):
            start = time.monotonic()
            await next()
            ctx.set_header("X-Time", f"{time.monotonic() - start:.3f}")
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
