from paystore.models import Currency
from paystore.specification import ByField, ById, WithLimitAndOffset
from paystore.store import OrderedMapStore, RelationalStore


def currency_by_id(currency_id: int) -> ById:
    return ById(currency_id)


def currency_by_numeric_code(numeric_code: int) -> ByField:
    return ByField("numeric_code", numeric_code)


def currency_by_char_code(char_code: str) -> ByField:
    return ByField("char_code", char_code)


def currencies_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


class OrderedMapCurrencyStore(OrderedMapStore[Currency]):
    entity = "currency"


class PGPoolCurrencyStore(RelationalStore[Currency]):
    """Currencies table: ISO 4217 numeric/char codes and minor-unit exponent."""

    entity = "currency"
    table = "currencies"
    model = Currency
    columns = ("numeric_code", "name", "char_code", "exponent")
