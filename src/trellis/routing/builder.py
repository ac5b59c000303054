"""Router builder — declarative, prefix-scoped route registration.

A ``Router`` accumulates one registration at a time and commits it to
a ``RouteTable``::

    api = Router("/api", table=table)
    v1 = Router("/v1", table=table).use(api)

    v1.post("/file/upload", upload).redirect("/file/upload2").state({"name": "Upload"}).exec()
    v1.get("/menu/list", search, get_data, paging).exec()

With ``auto_commit=True`` every method call commits immediately, and
annotations (``state``, ``no_back``) must be set *before* the method
call they apply to::

    v2 = Router("/api/v2", table=table, auto_commit=True)
    v2.state({"name": "Menu"}).get("/menu/list", search, get_data, paging)
    v2.redirect_route("GET", "/menu/list", "/menu/all")

Builder states are explicit: ``_Idle`` (optionally holding annotations
for the next registration) and ``_Pending``. ``exec()`` is the only
transition from pending back to idle.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from trellis.errors import ConfigurationError
from trellis.middleware.protocol import Middleware
from trellis.routing.redirect import Forward, move_route
from trellis.routing.route import Method, Perform, parse_method
from trellis.routing.table import RouteTable, default_table

logger = logging.getLogger("trellis.routing")

State: TypeAlias = Mapping[str, Any] | None


class Prefixed(Protocol):
    """Anything with a path prefix; usually another ``Router``."""

    prefix: str


@dataclass(slots=True)
class _Idle:
    """No registration pending. Holds annotations staged for the next one."""

    state: State = None
    excluded: bool = False


@dataclass(slots=True)
class _Pending:
    """A declared registration waiting for ``exec()``.

    ``path`` and ``redirect`` are stored unprefixed.
    """

    method: Method
    path: str
    middleware: tuple[Middleware, ...]
    state: State = None
    excluded: bool = False
    redirect: str | None = None


class Router:
    """Per-scope route builder.

    Args:
        prefix: Path prefix prepended to every registration.
        table: Table to commit into. Defaults to the process-wide table.
        auto_commit: Commit inside each method call instead of on ``exec()``.
    """

    __slots__ = ("_commits", "_stage", "auto_commit", "prefix", "table")

    def __init__(
        self,
        prefix: str = "",
        *,
        table: RouteTable | None = None,
        auto_commit: bool = False,
    ) -> None:
        self.prefix = prefix
        self.table = table if table is not None else default_table()
        self.auto_commit = auto_commit
        self._stage: _Idle | _Pending = _Idle()
        self._commits = 0

    def __repr__(self) -> str:
        return f"<Router prefix={self.prefix!r} commits={self._commits}>"

    @property
    def pending(self) -> bool:
        """True while a declared registration awaits ``exec()``."""
        return isinstance(self._stage, _Pending)

    def use(self, parent: Prefixed) -> Router:
        """Mount this router under *parent* by prepending its prefix.

        Call before registering anything on this router. Registrations
        already made keep their old paths; that is a caller error and
        is only logged.
        """
        if self._commits or self.pending:
            logger.warning(
                "Router(%r).use() called after routes were registered; "
                "existing routes keep their old prefix",
                self.prefix,
            )
        self.prefix = parent.prefix + self.prefix
        return self

    # -- Annotations --

    def state(self, state: State) -> Router:
        """Attach documentation metadata to the pending (or next) registration.

        Only the first entry of a multi-middleware registration carries
        it, so the route is documented once.
        """
        self._stage.state = state
        return self

    def remark(self, state: State) -> Router:
        """Alias of ``state()``."""
        return self.state(state)

    def no_back(self) -> Router:
        """Hide the pending (or next) registration from the route listing.

        Dispatch is unaffected.
        """
        self._stage.excluded = True
        return self

    # -- Registration --

    def method(self, method: str, path: str, *middleware: Middleware) -> Router:
        """Declare *middleware* for ``(method, prefix + path)``.

        Raises:
            DuplicateRouteError: The resolved pair is already registered.
            ConfigurationError: No middleware given, unknown method, or a
                previous registration is still pending.
        """
        tag = parse_method(method)
        full_path = self.prefix + path

        stage = self._stage
        if isinstance(stage, _Pending):
            msg = (
                f"{stage.method} {self.prefix + stage.path} is still pending; "
                f"call exec() before declaring {tag} {full_path}"
            )
            raise ConfigurationError(msg)
        if not middleware:
            msg = f"No middleware given for {tag} {full_path}"
            raise ConfigurationError(msg)
        self.table.ensure_available(tag, full_path)

        self._stage = _Pending(
            method=tag,
            path=path,
            middleware=tuple(middleware),
            state=stage.state,
            excluded=stage.excluded,
        )
        if self.auto_commit:
            self.exec()
        return self

    def all(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.ALL, path, *middleware)

    def get(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.GET, path, *middleware)

    def post(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.POST, path, *middleware)

    def put(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.PUT, path, *middleware)

    def delete(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.DELETE, path, *middleware)

    def head(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.HEAD, path, *middleware)

    def connect(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.CONNECT, path, *middleware)

    def options(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.OPTIONS, path, *middleware)

    def trace(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.TRACE, path, *middleware)

    def patch(self, path: str, *middleware: Middleware) -> Router:
        return self.method(Method.PATCH, path, *middleware)

    # -- Redirects --

    def redirect(self, path: str) -> Router:
        """Serve the pending registration at ``prefix + path`` instead.

        On commit, the middleware is registered at the new path (with
        ``origin_path`` recording the declared one) and a forwarding
        entry is left at the declared path.

        Raises:
            ConfigurationError: Nothing is pending, or *path* is the
                declared path itself.
            DuplicateRouteError: ``(method, prefix + path)`` is taken.
        """
        stage = self._stage
        if not isinstance(stage, _Pending):
            msg = (
                f"redirect({path!r}) needs a pending registration; "
                "use redirect_route() to move an already committed route"
            )
            raise ConfigurationError(msg)
        if path == stage.path:
            msg = f"{stage.method} {self.prefix + path} cannot redirect to itself"
            raise ConfigurationError(msg)
        self.table.ensure_available(stage.method, self.prefix + path)
        stage.redirect = path
        return self

    def redirect_route(self, method: str, origin_path: str, target_path: str) -> Router:
        """Move the committed ``(method, prefix + origin_path)`` route.

        See ``trellis.routing.redirect.move_route``.
        """
        move_route(self.table, method, self.prefix + origin_path, self.prefix + target_path)
        return self

    # -- Commit --

    def exec(self) -> None:
        """Commit the pending registration and return to idle.

        Pushes one entry per middleware. Only the first one carries the
        state annotation.

        Raises:
            ConfigurationError: Nothing is pending.
            DuplicateRouteError: The pair was registered by another
                builder since it was declared here.
        """
        stage = self._stage
        if not isinstance(stage, _Pending):
            msg = "Nothing to commit: declare a route with method()/get()/post()/... first"
            raise ConfigurationError(msg)

        declared = self.prefix + stage.path
        path = declared if stage.redirect is None else self.prefix + stage.redirect
        self.table.ensure_available(stage.method, path)

        performs: list[Perform] = []
        if stage.redirect is not None:
            self.table.ensure_available(stage.method, declared)
            performs.append(
                Perform(
                    method=stage.method,
                    path=declared,
                    middleware=Forward(path, self.table.config.redirect_status),
                    redirect_target=path,
                    excluded=stage.excluded,
                )
            )
        for index, middleware in enumerate(stage.middleware):
            performs.append(
                Perform(
                    method=stage.method,
                    path=path,
                    middleware=middleware,
                    state=stage.state if index == 0 else None,
                    origin_path=declared if stage.redirect is not None else None,
                    excluded=stage.excluded,
                )
            )

        self.table.extend(performs)
        self._stage = _Idle()
        self._commits += 1
        logger.debug("Registered %s %s (%d middleware)", stage.method, path, len(stage.middleware))

    def commit(self) -> None:
        """Alias of ``exec()``."""
        self.exec()
