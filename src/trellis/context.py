"""Per-request context.

A mutable object created once per request and threaded through every
middleware. It carries the inbound request metadata and accumulates
the outbound response (status, body, headers).

Middleware only ever mutates its own request's context, which is what
lets many requests be dispatched concurrently against one table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from trellis._internal.asgi import Scope


@dataclass(slots=True)
class Context:
    """Request metadata plus the response being built.

    ``status`` stays ``None`` until some middleware answers; the ASGI
    adapter uses that to tell a handled request from a fall-through.
    """

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    query_string: str = ""

    status: int | None = None
    body: str | bytes = ""
    content_type: str = "text/plain; charset=utf-8"
    response_headers: list[tuple[str, str]] = field(default_factory=list)

    # Free-form per-request storage for middleware
    state: dict[str, Any] = field(default_factory=dict)

    @property
    def responded(self) -> bool:
        """True once a status has been set."""
        return self.status is not None

    def set_header(self, name: str, value: str) -> None:
        """Add a response header."""
        self.response_headers.append((name, value))

    def get_header(self, name: str) -> str | None:
        """First response header named *name* (case-insensitive)."""
        wanted = name.lower()
        for key, value in self.response_headers:
            if key.lower() == wanted:
                return value
        return None

    def respond(
        self,
        body: str | bytes,
        status: int = 200,
        content_type: str | None = None,
    ) -> None:
        """Set the response body and status in one call."""
        self.body = body
        self.status = status
        if content_type is not None:
            self.content_type = content_type

    def redirect(self, url: str, status: int | None = None) -> None:
        """Answer with an HTTP redirect to *url* (302 unless given)."""
        self.status = status or 302
        self.set_header("Location", url)
        self.body = f"Redirecting to {url}"

    @classmethod
    def from_asgi(cls, scope: Scope) -> Context:
        """Create a Context from an ASGI HTTP scope."""
        headers = {
            name.decode("latin-1").lower(): value.decode("latin-1")
            for name, value in scope.get("headers", ())
        }
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=headers,
            query_string=scope.get("query_string", b"").decode("latin-1"),
        )
