"""Middleware protocol, request-context protocol, and Next type alias.

A middleware is any callable matching::

    async def my_mw(ctx: RequestContext, next: Next) -> None: ...

Plain ``def`` functions work too. No base class required. The
composition engine checks the shape, not the lineage.

A middleware decides whether, when, and how many times to await
``next()``. Not awaiting it short-circuits the rest of the chain.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeAlias, runtime_checkable

# Continuation handed to each middleware; runs the rest of the chain
Next: TypeAlias = Callable[[], Awaitable[Any]]


@runtime_checkable
class RequestContext(Protocol):
    """What the route layer needs from the host's per-request object.

    ``method`` and ``path`` drive matching. ``redirect`` is called by
    forwarding entries left behind by a redirect.
    ``trellis.context.Context`` is the bundled implementation.
    """

    method: str
    path: str

    def redirect(self, url: str, status: int | None = None) -> None: ...


class Middleware(Protocol):
    """Protocol for trellis middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(ctx: RequestContext, next: Next) -> None:
            start = time.monotonic()
            await next()
            ctx.set_header("X-Time", f"{time.monotonic() - start:.3f}")

        # Class middleware
        class RequireToken:
            async def __call__(self, ctx: RequestContext, next: Next) -> None:
                ...
    """

    def __call__(self, ctx: Any, next: Next) -> Any: ...
