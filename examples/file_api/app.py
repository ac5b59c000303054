"""File API: prefix-scoped routers, multi-middleware routes, and a redirect.

Demonstrates:
- Nested prefixes (``/api`` -> ``/api/v1``, ``/api/v2``)
- A three-step middleware chain (search -> get_data -> paging)
- Moving a committed route and leaving a forwarder behind
- A catch-all ``ALL`` middleware that is never listed
- ``no_back()`` for an endpoint kept out of the documentation

Run:
    cd examples/file_api && uvicorn app:app
    trellis routes app:table
"""

import json
import time

from trellis import ASGIApp, Context, Next, RouteTable, Router

table = RouteTable()

api = Router("/api", table=table)
v1 = Router("/v1", table=table).use(api)
v2 = Router("/v2", table=table).use(api)

MENU = [{"id": i, "title": f"Item {i}"} for i in range(1, 26)]


async def timing(ctx: Context, next: Next) -> None:
    start = time.monotonic()
    await next()
    ctx.set_header("X-Response-Time", f"{time.monotonic() - start:.3f}s")


async def upload(ctx: Context, next: Next) -> None:
    ctx.respond(json.dumps({"stored": True}), 201, "application/json")


async def search(ctx: Context, next: Next) -> None:
    query = dict(part.split("=", 1) for part in ctx.query_string.split("&") if "=" in part)
    ctx.state["query"] = query.get("q", "")
    ctx.state["page"] = int(query.get("page", "1"))
    await next()


async def get_data(ctx: Context, next: Next) -> None:
    ctx.state["items"] = [item for item in MENU if ctx.state["query"] in item["title"]]
    await next()


async def paging(ctx: Context, next: Next) -> None:
    page = ctx.state["page"]
    items = ctx.state["items"][(page - 1) * 10 : page * 10]
    ctx.respond(json.dumps({"page": page, "items": items}), 200, "application/json")


def health(ctx: Context, next: Next) -> None:
    ctx.respond("ok")


v1.post("/file/upload", upload).state({"name": "Upload file"}).exec()
v1.redirect_route("POST", "/file/upload", "/file/upload2")

v2.all("/menu/list", timing).exec()
v2.get("/menu/list", search, get_data, paging).state({"name": "Menu list"}).exec()

api.get("/health", health).no_back().exec()

app = ASGIApp(table)
