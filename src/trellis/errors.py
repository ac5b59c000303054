"""Trellis exception hierarchy.

Shared across the route table, builders, dispatcher, and the ASGI
adapter so every module raises and catches the same types.
"""

from dataclasses import dataclass


class TrellisError(Exception):
    """Base for all trellis-specific errors."""


class ConfigurationError(TrellisError):
    """Raised when route registration is invalid.

    Registration happens at startup; these are meant to crash
    configuration, not to be caught and retried.
    """


class DuplicateRouteError(ConfigurationError):
    """A ``(method, path)`` pair is already registered."""

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"Duplicate route: {method} {path}")


class UnregisteredRouteError(ConfigurationError):
    """A redirect names an origin ``(method, path)`` that was never registered."""

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"Cannot redirect {method} {path}: route is not registered yet")


class NextCalledTwiceError(TrellisError):
    """A middleware awaited its ``next`` more than once (strict mode only)."""


@dataclass(frozen=True, slots=True)
class HTTPError(TrellisError):
    """An error that maps directly to an HTTP status code.

    Only the ASGI adapter interprets these. The dispatcher itself lets
    every exception through untouched.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no middleware produced a response for the request path."""

    def __init__(self, detail: str = "Not Found", status: int = 404) -> None:
        super().__init__(status=status, detail=detail)
