from paystore.models import Channel
from paystore.specification import ByField, ById, WithLimitAndOffset
from paystore.store import OrderedMapStore, RelationalStore


def channel_by_id(channel_id: int) -> ById:
    return ById(channel_id)


def channel_by_type_id(type_id: int) -> ByField:
    return ByField("type_id", type_id)


def channel_by_key(key: str) -> ByField:
    return ByField("key", key)


def channels_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


class OrderedMapChannelStore(OrderedMapStore[Channel]):
    entity = "channel"


class PGPoolChannelStore(RelationalStore[Channel]):
    entity = "channel"
    table = "channels"
    model = Channel
    columns = ("type_id", "key")
