"""
Route

Binds a profile and an instrument kind to the account and router that
process it, plus router-specific settings.
"""

from paystore.route.repository import (
    OrderedMapRouteStore,
    PGPoolRouteStore,
    route_by_id,
    route_by_profile_and_instrument,
    routes_with_limit_and_offset,
)

__all__ = [
    "OrderedMapRouteStore",
    "PGPoolRouteStore",
    "route_by_id",
    "route_by_profile_and_instrument",
    "routes_with_limit_and_offset",
]
