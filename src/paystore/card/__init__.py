"""
Card

Card data is PCI scope: in production it lives in the vault and only the
masked PAN and the access token leave it.
"""

from paystore.card.repository import (
    ByPAN,
    OrderedMapCardStore,
    VaultHttpCardStore,
    card_by_id,
    card_by_pan,
    card_from_json,
    cards_with_limit_and_offset,
)

__all__ = [
    "ByPAN",
    "OrderedMapCardStore",
    "VaultHttpCardStore",
    "card_by_id",
    "card_by_pan",
    "card_from_json",
    "cards_with_limit_and_offset",
]
