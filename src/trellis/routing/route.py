"""Method enum, Perform table entries, and RouteInfo listing records."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from trellis.errors import ConfigurationError
from trellis.middleware.protocol import Middleware


class Method(StrEnum):
    """HTTP methods a route can be registered under.

    ``ALL`` is not a real HTTP method: it matches every inbound method
    and is never shown in the route listing.
    """

    ALL = "ALL"
    GET = "GET"
    POST = "POST"
    HEAD = "HEAD"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


def parse_method(method: str) -> Method:
    """Normalize a method name (case-insensitive) to ``Method``.

    Raises ``ConfigurationError`` for names outside the supported set.
    """
    try:
        return Method(method.upper())
    except ValueError:
        allowed = ", ".join(m.value for m in Method)
        msg = f"Unsupported HTTP method {method!r}. Expected one of: {allowed}"
        raise ConfigurationError(msg) from None


@dataclass(slots=True)
class Perform:
    """One committed binding of ``(method, path)`` to a middleware.

    Mutable on purpose: a redirect rewrites ``path`` in place so the
    entry keeps its middleware and state under the new address.
    """

    method: Method
    path: str
    middleware: Middleware
    state: Mapping[str, Any] | None = None
    origin_path: str | None = None
    redirect_target: str | None = None
    excluded: bool = False

    def matches(self, method: str, path: str) -> bool:
        """True if this entry serves a request for *method* and *path*."""
        return self.path == path and (self.method is Method.ALL or self.method == method)


@dataclass(frozen=True, slots=True)
class RouteInfo:
    """Documentation-friendly projection of a table entry.

    Never carries the middleware itself.
    """

    method: Method
    path: str
    state: Mapping[str, Any] | None = None
    origin_path: str | None = None
    redirect_target: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Flatten into a plain dict with the state keys at top level.

        Structural keys (``method``, ``path``, ...) win over state keys
        with the same name.
        """
        result: dict[str, Any] = dict(self.state or {})
        result["method"] = self.method.value
        result["path"] = self.path
        if self.origin_path is not None:
            result["origin_path"] = self.origin_path
        if self.redirect_target is not None:
            result["redirect_target"] = self.redirect_target
        return result
