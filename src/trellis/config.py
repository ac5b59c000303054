"""Route table configuration.

RouterConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Configuration shared by a route table, its builders, and its dispatcher.

    All fields have sensible defaults. Override what you need::

        table = RouteTable(RouterConfig(redirect_status=301, strict_next=True))
    """

    # Status used by forwarding entries left behind by a redirect
    redirect_status: int = 302

    # Raise NextCalledTwiceError instead of logging a warning
    strict_next: bool = False

    # Status the ASGI adapter sends when the chain returns unanswered
    not_found_status: int = 404
