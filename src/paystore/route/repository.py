from paystore.logs import LoggerFunc
from paystore.models import Account, Instrument, Profile, Route, Router
from paystore.repository import Repository
from paystore.specification import AllOf, ById, ByReference, WithLimitAndOffset
from paystore.store import OrderedMapStore, RelationalStore, wire


def route_by_id(route_id: int) -> ById:
    return ById(route_id)


def route_by_profile_and_instrument(profile_id: int, instrument_id: int) -> AllOf:
    """The route a profile uses for one instrument kind."""
    return AllOf(
        ByReference("profile", profile_id),
        ByReference("instrument", instrument_id),
    )


def routes_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


REFERENCE_FIELDS = {
    "profile": Profile,
    "instrument": Instrument,
    "account": Account,
    "router": Router,
}


def _wire(profile_store, instrument_store, account_store, router_store):
    return wire(
        profile=profile_store,
        instrument=instrument_store,
        account=account_store,
        router=router_store,
    )


class OrderedMapRouteStore(OrderedMapStore[Route]):
    entity = "route"
    reference_fields = REFERENCE_FIELDS

    def __init__(
        self,
        records: dict = None,
        profile_store: Repository[Profile] = None,
        instrument_store: Repository[Instrument] = None,
        account_store: Repository[Account] = None,
        router_store: Repository[Router] = None,
        logger: LoggerFunc = None,
    ):
        super().__init__(
            records,
            references=_wire(profile_store, instrument_store, account_store, router_store),
            logger=logger,
        )


class PGPoolRouteStore(RelationalStore[Route]):
    entity = "route"
    table = "routes"
    model = Route
    columns = ("settings",)
    json_columns = ("settings",)
    reference_fields = REFERENCE_FIELDS

    def __init__(
        self,
        pool,
        profile_store: Repository[Profile] = None,
        instrument_store: Repository[Instrument] = None,
        account_store: Repository[Account] = None,
        router_store: Repository[Router] = None,
        logger: LoggerFunc = None,
    ):
        super().__init__(
            pool,
            references=_wire(profile_store, instrument_store, account_store, router_store),
            logger=logger,
        )
