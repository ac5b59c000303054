"""Routing — declarative route table with exact-path dispatch.

Routes are registered through ``Router`` builders during startup,
listed through ``RouteTable.route_list()``, and served by a
``Dispatcher`` at request time.
"""

from trellis.routing.builder import Router
from trellis.routing.dispatcher import Dispatcher, routes
from trellis.routing.redirect import Forward, move_route
from trellis.routing.route import Method, Perform, RouteInfo, parse_method
from trellis.routing.table import RouteTable, default_table, get_route_list

__all__ = [
    "Dispatcher",
    "Forward",
    "Method",
    "Perform",
    "RouteInfo",
    "RouteTable",
    "Router",
    "default_table",
    "get_route_list",
    "move_route",
    "parse_method",
    "routes",
]
