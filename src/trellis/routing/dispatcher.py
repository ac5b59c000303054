"""Dispatcher — match a request against the route table and run its chain.

The dispatcher is itself a middleware, so a host framework mounts it
last in its own pipeline::

    dispatcher = Dispatcher(table)
    await dispatcher(ctx, host_next)

Every entry whose path equals ``ctx.path`` and whose method is
``ctx.method`` or ``ALL`` contributes its middleware, in insertion
order. The host's ``next`` becomes the chain's terminal continuation.
"""

from typing import Any

from trellis.middleware.compose import Chain, compose
from trellis.middleware.protocol import Middleware, RequestContext
from trellis.routing.table import RouteTable, default_table


class Dispatcher:
    """Runs the middleware registered for each inbound request.

    Reads the table at request time and never mutates it, so any number
    of requests may be dispatched concurrently.
    """

    __slots__ = ("table",)

    def __init__(self, table: RouteTable | None = None) -> None:
        self.table = table if table is not None else default_table()

    def chain_for(self, method: str, path: str, terminal: Middleware | None = None) -> Chain:
        """Build the chain that would serve *method* and *path*."""
        return compose(
            self.table.match(method, path),
            terminal,
            strict_next=self.table.config.strict_next,
        )

    async def __call__(self, ctx: RequestContext, next: Middleware | None = None) -> Any:
        chain = self.chain_for(ctx.method, ctx.path, next)
        return await chain.run(ctx)


async def routes(ctx: RequestContext, next: Middleware | None = None) -> Any:
    """Dispatch against the process-wide default table."""
    return await Dispatcher()(ctx, next)
