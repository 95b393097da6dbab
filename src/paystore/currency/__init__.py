"""
Currency

ISO 4217 currencies referenced by profiles, accounts and transactions.
"""

from paystore.currency.repository import (
    OrderedMapCurrencyStore,
    PGPoolCurrencyStore,
    currencies_with_limit_and_offset,
    currency_by_char_code,
    currency_by_id,
    currency_by_numeric_code,
)

__all__ = [
    "OrderedMapCurrencyStore",
    "PGPoolCurrencyStore",
    "currencies_with_limit_and_offset",
    "currency_by_char_code",
    "currency_by_id",
    "currency_by_numeric_code",
]
