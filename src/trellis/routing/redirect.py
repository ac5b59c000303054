"""Redirect resolver — move a committed route and leave a forwarder behind.

After ``move_route(table, "POST", "/upload", "/upload2")``:

- every entry registered under ``POST /upload`` now lives at
  ``/upload2`` (same objects, same middleware, same state);
- a new entry at ``POST /upload`` answers with a redirect to
  ``/upload2``.
"""

import logging
from dataclasses import dataclass
from typing import Any

from trellis.errors import UnregisteredRouteError
from trellis.middleware.protocol import Next, RequestContext
from trellis.routing.route import Perform, parse_method
from trellis.routing.table import RouteTable

logger = logging.getLogger("trellis.routing")


@dataclass(frozen=True, slots=True)
class Forward:
    """Middleware that answers with an HTTP redirect to ``target``.

    Never calls ``next``: a forwarded request ends here.
    """

    target: str
    status: int = 302

    def __call__(self, ctx: RequestContext, next: Next) -> Any:  # noqa: ARG002
        ctx.redirect(self.target, self.status)

    def __repr__(self) -> str:
        return f"Forward({self.target!r}, status={self.status})"


def move_route(
    table: RouteTable,
    method: str,
    origin: str,
    target: str,
    *,
    status: int | None = None,
) -> None:
    """Move the ``(method, origin)`` registration to *target*.

    *origin* and *target* are fully resolved paths.

    Raises:
        UnregisteredRouteError: Nothing is registered at ``(method, origin)``.
        DuplicateRouteError: ``(method, target)`` is already taken.
    """
    tag = parse_method(method)
    if not table.has(tag, origin):
        raise UnregisteredRouteError(tag.value, origin)
    table.ensure_available(tag, target)

    moved = table.find(tag, origin)
    if not moved:
        return

    for perform in moved:
        perform.path = target

    redirect_status = status if status is not None else table.config.redirect_status
    table.add(
        Perform(
            method=tag,
            path=origin,
            middleware=Forward(target, redirect_status),
            state=None,
            redirect_target=target,
        )
    )
    logger.debug("Redirected %s %s -> %s (%d entries moved)", tag.value, origin, target, len(moved))
