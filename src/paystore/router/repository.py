from paystore.models import Router
from paystore.specification import ByField, ById, WithLimitAndOffset
from paystore.store import OrderedMapStore, RelationalStore


def router_by_id(router_id: int) -> ById:
    return ById(router_id)


def router_by_key(key: str) -> ByField:
    return ByField("key", key)


def routers_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


class OrderedMapRouterStore(OrderedMapStore[Router]):
    entity = "router"


class PGPoolRouterStore(RelationalStore[Router]):
    entity = "router"
    table = "routers"
    model = Router
    columns = ("key",)
