"""Tests for trellis.server.asgi — serving a route table over ASGI."""

import logging

import pytest

from trellis.config import RouterConfig
from trellis.errors import HTTPError
from trellis.routing.builder import Router
from trellis.routing.table import RouteTable
from trellis.server.asgi import ASGIApp
from trellis.testing import TestClient


async def ping(ctx, next):
    ctx.respond("pong")


async def upload(ctx, next):
    ctx.respond("stored", 201)


async def powered_by(ctx, next):
    await next()
    ctx.set_header("X-Powered-By", "trellis")


def _make_app(config: RouterConfig | None = None, *, debug: bool = False) -> ASGIApp:
    table = RouteTable(config)
    api = Router("/api", table=table)
    v1 = Router("/v1", table=table).use(api)
    v1.all("/ping", powered_by).exec()
    v1.get("/ping", ping).exec()
    v1.post("/file/upload", upload).exec()
    v1.redirect_route("POST", "/file/upload", "/file/upload2")
    return ASGIApp(table, debug=debug)


class TestServing:
    async def test_matched_chain(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/api/v1/ping")
        assert response.status == 200
        assert response.text == "pong"
        assert response.header("x-powered-by") == "trellis"
        assert response.header("content-type") == "text/plain; charset=utf-8"

    async def test_query_string_does_not_affect_matching(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/api/v1/ping?verbose=1")
        assert response.text == "pong"

    async def test_redirected_route(self) -> None:
        async with TestClient(_make_app()) as client:
            old = await client.post("/api/v1/file/upload")
            new = await client.post("/api/v1/file/upload2", body=b"data")
        assert old.status == 302
        assert old.location == "/api/v1/file/upload2"
        assert new.status == 201
        assert new.text == "stored"

    async def test_redirect_status_from_config(self) -> None:
        async with TestClient(_make_app(RouterConfig(redirect_status=308))) as client:
            response = await client.post("/api/v1/file/upload")
        assert response.status == 308


class TestFallThrough:
    async def test_not_found(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/api/v1/missing")
        assert response.status == 404
        assert "No route matches GET" in response.text

    async def test_trailing_slash_not_found(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/api/v1/ping/")
        assert response.status == 404

    async def test_all_only_chain_falls_through(self) -> None:
        # /ping is answered by GET; DELETE only matches the ALL entry
        async with TestClient(_make_app()) as client:
            response = await client.delete("/api/v1/ping")
        assert response.status == 404

    async def test_custom_not_found_status(self) -> None:
        async with TestClient(_make_app(RouterConfig(not_found_status=410))) as client:
            response = await client.get("/nowhere")
        assert response.status == 410

    async def test_response_set_after_next_is_sent(self) -> None:
        async def late(ctx, next):
            await next()
            ctx.respond("late")

        table = RouteTable()
        router = Router(table=table)
        router.all("/late", powered_by).exec()
        router.get("/late", late).exec()
        async with TestClient(ASGIApp(table)) as client:
            response = await client.get("/late")
        assert response.status == 200
        assert response.text == "late"
        assert response.header("x-powered-by") == "trellis"

    async def test_chain_that_stops_unanswered_is_not_found(self) -> None:
        async def silent(ctx, next):
            ctx.set_header("X-Seen", "1")

        table = RouteTable()
        Router(table=table).get("/silent", silent).exec()
        async with TestClient(ASGIApp(table)) as client:
            response = await client.get("/silent")
        assert response.status == 404
        assert response.text == "No route matches GET '/silent'"


class TestErrors:
    async def test_http_error_status_and_headers(self) -> None:
        async def teapot(ctx, next):
            raise HTTPError(status=418, detail="short and stout", headers=(("X-Kind", "teapot"),))

        table = RouteTable()
        Router(table=table).get("/tea", teapot).exec()
        async with TestClient(ASGIApp(table)) as client:
            response = await client.get("/tea")
        assert response.status == 418
        assert response.text == "short and stout"
        assert response.header("x-kind") == "teapot"

    async def test_internal_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        async def broken(ctx, next):
            ctx.respond("partial")
            raise RuntimeError("kaput")

        table = RouteTable()
        Router(table=table).get("/broken", broken).exec()
        with caplog.at_level(logging.ERROR, logger="trellis.server"):
            async with TestClient(ASGIApp(table)) as client:
                response = await client.get("/broken")
        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "500 GET /broken" in caplog.text

    async def test_debug_shows_exception(self) -> None:
        async def broken(ctx, next):
            raise RuntimeError("kaput")

        table = RouteTable()
        Router(table=table).get("/broken", broken).exec()
        async with TestClient(ASGIApp(table, debug=True)) as client:
            response = await client.get("/broken")
        assert response.text == "RuntimeError: kaput"


class TestNonHTTP:
    async def test_ignores_other_scope_types(self) -> None:
        messages: list[dict] = []

        async def receive() -> dict:
            return {"type": "lifespan.startup"}

        async def send(message: dict) -> None:
            messages.append(message)

        await ASGIApp(RouteTable())({"type": "lifespan"}, receive, send)
        assert messages == []
