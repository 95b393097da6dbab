from paystore.logs import LoggerFunc
from paystore.models import Currency, Profile
from paystore.repository import Repository
from paystore.specification import ByField, ById, WithLimitAndOffset
from paystore.store import OrderedMapStore, RelationalStore, wire


def profile_by_id(profile_id: int) -> ById:
    return ById(profile_id)


def profile_by_key(key: str) -> ByField:
    return ByField("key", key)


def profiles_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


REFERENCE_FIELDS = {"currency": Currency}


class OrderedMapProfileStore(OrderedMapStore[Profile]):
    entity = "profile"
    reference_fields = REFERENCE_FIELDS

    def __init__(
        self,
        records: dict = None,
        currency_store: Repository[Currency] = None,
        logger: LoggerFunc = None,
    ):
        super().__init__(records, references=wire(currency=currency_store), logger=logger)


class PGPoolProfileStore(RelationalStore[Profile]):
    entity = "profile"
    table = "profiles"
    model = Profile
    columns = ("key", "description")
    reference_fields = REFERENCE_FIELDS

    def __init__(
        self,
        pool,
        currency_store: Repository[Currency] = None,
        logger: LoggerFunc = None,
    ):
        super().__init__(pool, references=wire(currency=currency_store), logger=logger)
