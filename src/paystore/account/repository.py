from paystore.logs import LoggerFunc
from paystore.models import Account, Channel, Currency
from paystore.repository import Repository
from paystore.specification import ById, ByReference, WithLimitAndOffset
from paystore.store import OrderedMapStore, RelationalStore, wire


def account_by_id(account_id: int) -> ById:
    return ById(account_id)


def accounts_by_channel(channel_id: int) -> ByReference:
    return ByReference("channel", channel_id)


def accounts_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


REFERENCE_FIELDS = {"currency": Currency, "channel": Channel}


class OrderedMapAccountStore(OrderedMapStore[Account]):
    entity = "account"
    reference_fields = REFERENCE_FIELDS

    def __init__(
        self,
        records: dict = None,
        currency_store: Repository[Currency] = None,
        channel_store: Repository[Channel] = None,
        logger: LoggerFunc = None,
    ):
        super().__init__(
            records,
            references=wire(currency=currency_store, channel=channel_store),
            logger=logger,
        )


class PGPoolAccountStore(RelationalStore[Account]):
    """
    Merchant accounts: capability flags, settlement currency and channel.

    Currency and channel come back hydrated through their own stores.
    """

    entity = "account"
    table = "accounts"
    model = Account
    columns = (
        "is_enabled",
        "is_test",
        "rebill_enabled",
        "refund_enabled",
        "reversal_enabled",
        "partial_confirm_enabled",
        "partial_reversal_enabled",
        "partial_refund_enabled",
        "currency_conversion_enabled",
        "settings",
    )
    json_columns = ("settings",)
    reference_fields = REFERENCE_FIELDS

    def __init__(
        self,
        pool,
        currency_store: Repository[Currency] = None,
        channel_store: Repository[Channel] = None,
        logger: LoggerFunc = None,
    ):
        super().__init__(
            pool,
            references=wire(currency=currency_store, channel=channel_store),
            logger=logger,
        )
