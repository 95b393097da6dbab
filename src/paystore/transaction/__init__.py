"""
Transaction

Payment operations (authorize, refund, ...) with their amounts, processor
responses and 3-D Secure artifacts.
"""

from paystore.models import (
    AUTH,
    CONFIRMAUTH,
    DECLINED,
    NEW,
    PREAUTH,
    REBILL,
    REFUND,
    REVERSAL,
    SUCCESS,
    WAIT3DS,
    WAITMETHODURL,
    new_transaction,
)
from paystore.transaction.repository import (
    OrderedMapTransactionStore,
    PGPoolTransactionStore,
    TurnOver,
    transaction_by_id,
    transaction_by_reference_and_status,
    transactions_by_order_id,
    transactions_with_limit_and_offset,
)

__all__ = [
    "AUTH",
    "CONFIRMAUTH",
    "DECLINED",
    "NEW",
    "PREAUTH",
    "REBILL",
    "REFUND",
    "REVERSAL",
    "SUCCESS",
    "WAIT3DS",
    "WAITMETHODURL",
    "OrderedMapTransactionStore",
    "PGPoolTransactionStore",
    "TurnOver",
    "new_transaction",
    "transaction_by_id",
    "transaction_by_reference_and_status",
    "transactions_by_order_id",
    "transactions_with_limit_and_offset",
]
