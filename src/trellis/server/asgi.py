"""ASGI adapter — serves a route table from any ASGI server.

The only component that touches raw ASGI directly. Converts the scope
into a ``Context``, runs the dispatcher, and sends the response.

This is a thin host, not a framework: it exists so a table can be
served and tested end to end. Error handling lives here, not in the
dispatcher::

    table = RouteTable()
    Router("/api", table=table).get("/ping", ping).exec()
    app = ASGIApp(table)   # uvicorn mymodule:app
"""

import logging

from trellis._internal.asgi import Receive, Scope, Send
from trellis.context import Context
from trellis.errors import HTTPError, NotFound
from trellis.routing.dispatcher import Dispatcher
from trellis.routing.table import RouteTable, default_table
from trellis.server.sender import send_response

logger = logging.getLogger("trellis.server")


class ASGIApp:
    """ASGI 3 callable dispatching HTTP requests through a ``RouteTable``.

    When the whole chain has returned without setting a status, the
    request is answered with ``RouterConfig.not_found_status``.
    """

    __slots__ = ("debug", "dispatcher", "table")

    def __init__(self, table: RouteTable | None = None, *, debug: bool = False) -> None:
        self.table = table if table is not None else default_table()
        self.dispatcher = Dispatcher(self.table)
        self.debug = debug

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        ctx = Context.from_asgi(scope)
        try:
            await self.dispatcher(ctx)
            if not ctx.responded:
                detail = f"No route matches {ctx.method} {ctx.path!r}"
                raise NotFound(detail, self.table.config.not_found_status)
        except HTTPError as exc:
            logger.debug("%d %s %s — %s", exc.status, ctx.method, ctx.path, exc.detail)
            ctx = _error_context(ctx, exc.status, exc.detail or str(exc.status), exc.headers)
        except Exception as exc:
            logger.exception("500 %s %s", ctx.method, ctx.path)
            detail = f"{type(exc).__name__}: {exc}" if self.debug else "Internal Server Error"
            ctx = _error_context(ctx, 500, detail)

        await send_response(ctx, send)


def _error_context(
    ctx: Context,
    status: int,
    detail: str,
    headers: tuple[tuple[str, str], ...] = (),
) -> Context:
    """A fresh response for *ctx*'s request, discarding partial output."""
    error_ctx = Context(
        method=ctx.method,
        path=ctx.path,
        headers=ctx.headers,
        query_string=ctx.query_string,
    )
    error_ctx.respond(detail, status)
    for name, value in headers:
        error_ctx.set_header(name, value)
    return error_ctx
