"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(ctx: RequestContext, next: Next) -> None

Composition:
    Chain -- Immutable middleware sequence plus terminal continuation
    compose -- Build a Chain from any iterable of middleware
"""

from trellis.middleware.compose import Chain, compose
from trellis.middleware.protocol import Middleware, Next, RequestContext

__all__ = [
    "Chain",
    "Middleware",
    "Next",
    "RequestContext",
    "compose",
]
