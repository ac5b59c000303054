"""Trellis — declarative route tables with onion-style middleware chains.

Register routes through prefix-scoped builders, list them for
documentation, and dispatch requests by exact path match.

Basic usage::

    from trellis import Dispatcher, RouteTable, Router

    table = RouteTable()
    api = Router("/api", table=table)
    v1 = Router("/v1", table=table).use(api)

    v1.get("/menu/list", search, get_data, paging).state({"name": "Menu"}).exec()
    v1.post("/file/upload", upload).exec()
    v1.redirect_route("POST", "/file/upload", "/file/upload2")

    table.route_list()              # documentation view
    await Dispatcher(table)(ctx, next)

Serve it with any ASGI server::

    from trellis import ASGIApp
    app = ASGIApp(table)
"""

__version__ = "0.1.0"
__all__ = [
    "ASGIApp",
    "Chain",
    "ConfigurationError",
    "Context",
    "Dispatcher",
    "DuplicateRouteError",
    "HTTPError",
    "Method",
    "Middleware",
    "Next",
    "NextCalledTwiceError",
    "NotFound",
    "RequestContext",
    "RouteInfo",
    "RouteTable",
    "Router",
    "RouterConfig",
    "TrellisError",
    "UnregisteredRouteError",
    "compose",
    "get_route_list",
    "routes",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ASGIApp": "trellis.server.asgi",
    "Chain": "trellis.middleware.compose",
    "ConfigurationError": "trellis.errors",
    "Context": "trellis.context",
    "Dispatcher": "trellis.routing.dispatcher",
    "DuplicateRouteError": "trellis.errors",
    "HTTPError": "trellis.errors",
    "Method": "trellis.routing.route",
    "Middleware": "trellis.middleware.protocol",
    "Next": "trellis.middleware.protocol",
    "NextCalledTwiceError": "trellis.errors",
    "NotFound": "trellis.errors",
    "RequestContext": "trellis.middleware.protocol",
    "RouteInfo": "trellis.routing.route",
    "RouteTable": "trellis.routing.table",
    "Router": "trellis.routing.builder",
    "RouterConfig": "trellis.config",
    "TrellisError": "trellis.errors",
    "UnregisteredRouteError": "trellis.errors",
    "compose": "trellis.middleware.compose",
    "get_route_list": "trellis.routing.table",
    "routes": "trellis.routing.dispatcher",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trellis`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
