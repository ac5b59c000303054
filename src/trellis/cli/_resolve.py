"""Import resolution — resolves ``"module:attribute"`` strings to route tables.

Used by ``trellis routes`` to locate a table from a user-supplied
import string.
"""

import importlib

from trellis.routing.builder import Router
from trellis.routing.table import RouteTable
from trellis.server.asgi import ASGIApp


def _as_table(obj: object) -> RouteTable | None:
    if isinstance(obj, RouteTable):
        return obj
    if isinstance(obj, (Router, ASGIApp)):
        return obj.table
    return None


def resolve_table(import_string: str) -> RouteTable:
    """Resolve an import string to a ``RouteTable``.

    Accepts ``"module:attribute"`` format. When the attribute portion
    is omitted, defaults to ``"table"``. The attribute may be a
    ``RouteTable``, a ``Router`` or an ``ASGIApp`` (their table is
    used), or a factory returning one of those.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object does not lead to a table.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "table"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    table = _as_table(obj)
    if table is None and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc
        table = _as_table(obj)

    if table is None:
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a trellis RouteTable"
        raise TypeError(msg)

    return table
