from paystore.models import Instrument
from paystore.specification import ByField, ById, WithLimitAndOffset
from paystore.store import OrderedMapStore, RelationalStore


def instrument_by_id(instrument_id: int) -> ById:
    return ById(instrument_id)


def instrument_by_key(key: str) -> ByField:
    return ByField("key", key)


def instruments_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


class OrderedMapInstrumentStore(OrderedMapStore[Instrument]):
    entity = "instrument"


class PGPoolInstrumentStore(RelationalStore[Instrument]):
    entity = "instrument"
    table = "instruments"
    model = Instrument
    columns = ("key",)
