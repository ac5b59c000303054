"""Route table — the ordered registry of committed performs.

The table is the single source of truth for builders, the lister, and
the dispatcher. It is append-only; the only in-place mutation is the
path rewrite performed by a redirect.

Registration is expected to finish before dispatch starts. There is
no locking: dispatch only reads, and concurrent registration during
live traffic is unsupported.
"""

from collections.abc import Iterable, Iterator

from trellis.config import RouterConfig
from trellis.errors import DuplicateRouteError
from trellis.middleware.protocol import Middleware
from trellis.routing.route import Method, Perform, RouteInfo, parse_method


class RouteTable:
    """Ordered list of ``Perform`` entries.

    Usage::

        table = RouteTable()
        api = Router("/api", table=table)
        api.get("/users", list_users).exec()
        table.match("GET", "/api/users")   # -> (list_users,)
    """

    __slots__ = ("_entries", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config = config or RouterConfig()
        self._entries: list[Perform] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Perform]:
        return iter(tuple(self._entries))

    def __repr__(self) -> str:
        return f"<RouteTable entries={len(self._entries)}>"

    @property
    def entries(self) -> tuple[Perform, ...]:
        """Snapshot of every entry in insertion order."""
        return tuple(self._entries)

    # -- Lookup --

    def find(self, method: str, path: str) -> list[Perform]:
        """Entries registered under exactly *method* and *path*.

        ``ALL`` is only returned when asked for by name: this is the
        registration view, not the request-matching view.
        """
        tag = parse_method(method)
        return [p for p in self._entries if p.method is tag and p.path == path]

    def has(self, method: str, path: str) -> bool:
        """True if *method* and *path* are already registered."""
        tag = parse_method(method)
        return any(p.method is tag and p.path == path for p in self._entries)

    def ensure_available(self, method: str, path: str) -> None:
        """Raise ``DuplicateRouteError`` if *method* and *path* are taken."""
        if self.has(method, path):
            raise DuplicateRouteError(parse_method(method).value, path)

    def match(self, method: str, path: str) -> tuple[Middleware, ...]:
        """Middleware serving a request, in insertion order.

        Exact, case-sensitive path comparison. Entries registered under
        ``ALL`` match every method.
        """
        return tuple(p.middleware for p in self._entries if p.matches(method, path))

    # -- Mutation --

    def add(self, perform: Perform) -> None:
        """Append one entry. Callers are responsible for dedup checks."""
        self._entries.append(perform)

    def extend(self, performs: Iterable[Perform]) -> None:
        """Append several entries in order."""
        self._entries.extend(performs)

    # -- Listing --

    def route_list(self) -> list[RouteInfo]:
        """Deduplicated, documentation-friendly view of the table.

        Skips ``ALL`` entries and entries flagged as excluded, keeps the
        first entry for each ``(method, path)``.
        """
        seen: set[tuple[Method, str]] = set()
        result: list[RouteInfo] = []
        for perform in self._entries:
            if perform.method is Method.ALL or perform.excluded:
                continue
            key = (perform.method, perform.path)
            if key in seen:
                continue
            seen.add(key)
            result.append(
                RouteInfo(
                    method=perform.method,
                    path=perform.path,
                    state=perform.state,
                    origin_path=perform.origin_path,
                    redirect_target=perform.redirect_target,
                )
            )
        return result


_default_table = RouteTable()


def default_table() -> RouteTable:
    """The process-wide table used by builders created without ``table=``."""
    return _default_table


def get_route_list() -> list[RouteInfo]:
    """Route listing of the process-wide default table."""
    return _default_table.route_list()
