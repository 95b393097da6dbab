"""
Router

Processing routers a route sends transactions to, identified by key.
"""

from paystore.router.repository import (
    OrderedMapRouterStore,
    PGPoolRouterStore,
    router_by_id,
    router_by_key,
    routers_with_limit_and_offset,
)

__all__ = [
    "OrderedMapRouterStore",
    "PGPoolRouterStore",
    "router_by_id",
    "router_by_key",
    "routers_with_limit_and_offset",
]
