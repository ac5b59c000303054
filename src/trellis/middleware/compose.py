"""Onion-style middleware composition.

A ``Chain`` is an immutable sequence of middleware plus an optional
terminal continuation. ``Chain.run()`` builds an index-parameterized
``dispatch(i)``: it invokes ``middleware[i]`` (or the terminal once
``i`` reaches the end) with the context and a ``next`` bound to
``dispatch(i + 1)``.

Ordering is strict. Middleware ``k + 1`` only starts when middleware
``k`` awaits its ``next``. Exceptions are not caught here; they travel
back through every awaiting middleware to the caller of ``run()``.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from functools import partial
from typing import Any

from trellis._internal.invoke import invoke
from trellis.errors import NextCalledTwiceError
from trellis.middleware.protocol import Middleware

logger = logging.getLogger("trellis.dispatch")


async def _end() -> None:
    """The ``next`` handed to the terminal: nothing left to run."""
    return None


@dataclass(frozen=True, slots=True)
class Chain:
    """An ordered, immutable middleware chain.

    ``terminal`` is the host's fallback continuation, called with the
    same ``(ctx, next)`` signature as any middleware once the chain is
    exhausted. Its ``next`` is a no-op.

    Awaiting ``next`` twice from the same middleware re-runs the rest of
    the chain and logs a warning. With ``strict_next=True`` it raises
    ``NextCalledTwiceError`` instead.
    """

    middleware: tuple[Middleware, ...]
    terminal: Middleware | None = None
    strict_next: bool = False

    def __len__(self) -> int:
        return len(self.middleware)

    async def run(self, ctx: Any) -> Any:
        """Run the chain for one request context."""
        entered: set[int] = set()

        async def dispatch(i: int) -> Any:
            if i in entered:
                msg = f"next() called multiple times (chain position {i})"
                if self.strict_next:
                    raise NextCalledTwiceError(msg)
                logger.warning(msg)
            entered.add(i)

            if i == len(self.middleware):
                if self.terminal is None:
                    return None
                return await invoke(self.terminal, ctx, _end)
            return await invoke(self.middleware[i], ctx, partial(dispatch, i + 1))

        return await dispatch(0)


def compose(
    middleware: Iterable[Middleware],
    terminal: Middleware | None = None,
    *,
    strict_next: bool = False,
) -> Chain:
    """Freeze *middleware* into a ``Chain`` ending in *terminal*.

    Usage::

        chain = compose([auth, load, render], terminal=not_found)
        await chain.run(ctx)
    """
    return Chain(tuple(middleware), terminal, strict_next)
