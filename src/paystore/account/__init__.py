"""
Account

Merchant accounts with their capability flags. Each account references a
currency and a channel.
"""

from paystore.account.repository import (
    OrderedMapAccountStore,
    PGPoolAccountStore,
    account_by_id,
    accounts_by_channel,
    accounts_with_limit_and_offset,
)

__all__ = [
    "OrderedMapAccountStore",
    "PGPoolAccountStore",
    "account_by_id",
    "accounts_by_channel",
    "accounts_with_limit_and_offset",
]
