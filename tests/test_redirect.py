"""Tests for trellis.routing.redirect — moving committed routes."""

import pytest

from trellis.config import RouterConfig
from trellis.context import Context
from trellis.errors import DuplicateRouteError, UnregisteredRouteError
from trellis.routing.builder import Router
from trellis.routing.redirect import Forward, move_route
from trellis.routing.route import Method
from trellis.routing.table import RouteTable


async def upload(ctx, next):
    ctx.respond("stored", 201)


async def audit(ctx, next):
    ctx.state["audited"] = True
    await next()


class TestForward:
    def test_redirects_and_stops(self) -> None:
        calls: list[str] = []

        async def next_() -> None:
            calls.append("next")

        ctx = Context(method="GET", path="/old")
        Forward("/new", 301)(ctx, next_)
        assert ctx.status == 301
        assert ctx.get_header("Location") == "/new"
        assert calls == []

    def test_repr(self) -> None:
        assert repr(Forward("/new")) == "Forward('/new', status=302)"


class TestMoveRoute:
    def test_entries_are_moved_in_place(self) -> None:
        table = RouteTable()
        Router("/api", table=table).post("/upload", audit, upload).state({"name": "Upload"}).exec()
        originals = table.entries

        move_route(table, "POST", "/api/upload", "/api/upload2")

        assert table.entries[:2] == originals
        assert [p.path for p in originals] == ["/api/upload2", "/api/upload2"]
        assert [p.middleware for p in originals] == [audit, upload]
        assert originals[0].state == {"name": "Upload"}

    def test_forwarding_entry_appended(self) -> None:
        table = RouteTable()
        Router(table=table).post("/upload", upload).exec()
        move_route(table, "POST", "/upload", "/upload2")

        forward = table.entries[-1]
        assert len(table) == 2
        assert forward.method is Method.POST
        assert forward.path == "/upload"
        assert forward.state is None
        assert forward.redirect_target == "/upload2"
        assert forward.middleware == Forward("/upload2", 302)

    def test_status_from_config(self) -> None:
        table = RouteTable(RouterConfig(redirect_status=307))
        Router(table=table).post("/a", upload).exec()
        move_route(table, "POST", "/a", "/b")
        assert table.entries[-1].middleware.status == 307

    def test_explicit_status(self) -> None:
        table = RouteTable()
        Router(table=table).post("/a", upload).exec()
        move_route(table, "POST", "/a", "/b", status=301)
        assert table.entries[-1].middleware.status == 301

    def test_only_the_given_method_moves(self) -> None:
        table = RouteTable()
        router = Router(table=table)
        router.get("/x", audit).exec()
        router.post("/x", upload).exec()
        move_route(table, "POST", "/x", "/y")
        assert table.match("GET", "/x") == (audit,)
        assert table.match("POST", "/y") == (upload,)

    def test_unregistered_origin(self) -> None:
        table = RouteTable()
        Router(table=table).get("/x", audit).exec()
        before = [(p.method, p.path) for p in table.entries]
        with pytest.raises(UnregisteredRouteError, match="not registered yet") as exc_info:
            move_route(table, "POST", "/x", "/y")
        assert exc_info.value.method == "POST"
        assert exc_info.value.path == "/x"
        assert [(p.method, p.path) for p in table.entries] == before

    def test_target_taken(self) -> None:
        table = RouteTable()
        router = Router(table=table)
        router.post("/a", upload).exec()
        router.post("/b", audit).exec()
        with pytest.raises(DuplicateRouteError):
            move_route(table, "POST", "/a", "/b")
        assert [p.path for p in table.entries] == ["/a", "/b"]


class TestRedirectRoute:
    def test_upload_scenario_listing(self) -> None:
        table = RouteTable()
        api = Router("/api", table=table)
        v1 = Router("/v1", table=table, auto_commit=True).use(api)
        v1.state({"name": "Upload file"}).post("/file/upload", upload)
        assert v1.redirect_route("POST", "/file/upload", "/file/upload2") is v1

        assert [info.as_dict() for info in table.route_list()] == [
            {"name": "Upload file", "method": "POST", "path": "/api/v1/file/upload2"},
            {
                "method": "POST",
                "path": "/api/v1/file/upload",
                "redirect_target": "/api/v1/file/upload2",
            },
        ]

    def test_prefix_applied_to_both_paths(self) -> None:
        table = RouteTable()
        router = Router("/api", table=table)
        router.get("/a", audit).exec()
        with pytest.raises(UnregisteredRouteError, match="/api/missing"):
            router.redirect_route("GET", "/missing", "/b")

    def test_chained_moves(self) -> None:
        table = RouteTable()
        router = Router(table=table, auto_commit=True)
        router.get("/v1", audit)
        router.redirect_route("GET", "/v1", "/v2").redirect_route("GET", "/v2", "/v3")
        assert table.match("GET", "/v3") == (audit,)
        assert table.match("GET", "/v1") == (Forward("/v2"),)
        assert table.match("GET", "/v2") == (Forward("/v3"),)
