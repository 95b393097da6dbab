from datetime import datetime, timezone
from typing import NamedTuple

import psycopg

from paystore import db
from paystore.context import Context
from paystore.errors import SpecificationError, StorageError
from paystore.logs import LoggerFunc
from paystore.models import (
    Account,
    Currency,
    Instrument,
    Profile,
    ThreeDSecure10,
    ThreeDSecure20,
    ThreeDSMethodUrl,
    Transaction,
)
from paystore.repository import Repository
from paystore.specification import (
    All,
    AllOf,
    ByField,
    ById,
    ByReference,
    Filter,
    Specification,
    WithLimitAndOffset,
)
from paystore.store import OrderedMapStore, RelationalStore, wire


class TurnOver(NamedTuple):
    count: int
    total: int


def transaction_by_id(transaction_id: int) -> ById:
    return ById(transaction_id)


def transaction_by_reference_and_status(reference_id: int, status: str) -> AllOf:
    """Follow-up operations (confirm, reversal, refund) of a transaction."""
    return AllOf(ByReference("reference", reference_id), ByField("status", status))


def transactions_by_order_id(order_id: str) -> ByField:
    return ByField("order_id", order_id)


def transactions_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


REFERENCE_FIELDS = {
    "profile": Profile,
    "account": Account,
    "instrument": Instrument,
    "currency": Currency,
    "currency_converted": Currency,
    "reference": Transaction,
}


def _check_turnover_specification(specification: Specification) -> None:
    if not isinstance(specification, (Filter, All)):
        raise SpecificationError(
            f"turnover needs a filter specification, got {specification!r}"
        )


class _TransactionWiring:
    """Reference stores of a transaction; the reference field points back at itself."""

    def _references(
        self,
        profile_store,
        account_store,
        instrument_store,
        currency_store,
    ) -> dict:
        return wire(
            profile=profile_store,
            account=account_store,
            instrument=instrument_store,
            currency=currency_store,
            currency_converted=currency_store,
            reference=self,
        )


class OrderedMapTransactionStore(_TransactionWiring, OrderedMapStore[Transaction]):
    entity = "transaction"
    reference_fields = REFERENCE_FIELDS
    immutable = ("created",)

    def __init__(
        self,
        records: dict = None,
        profile_store: Repository[Profile] = None,
        account_store: Repository[Account] = None,
        instrument_store: Repository[Instrument] = None,
        currency_store: Repository[Currency] = None,
        logger: LoggerFunc = None,
    ):
        super().__init__(records, logger=logger)
        self.references = self._references(
            profile_store, account_store, instrument_store, currency_store
        )

    def prepare(self, record: Transaction) -> None:
        record.created = datetime.now(timezone.utc)

    def type_turnover(self, ctx: Context, specification: Specification) -> dict[str, TurnOver]:
        """Count and amount sum per transaction type over the matching records."""
        _check_turnover_specification(specification)
        _, transactions = self.query(ctx, specification)

        result: dict[str, TurnOver] = {}
        for tx in transactions:
            count, total = result.get(tx.type, TurnOver(0, 0))
            result[tx.type] = TurnOver(count + 1, total + (tx.amount or 0))
        return result


class PGPoolTransactionStore(_TransactionWiring, RelationalStore[Transaction]):
    """
    Transactions table.

    ``created`` is set by the database; 3-D Secure artifacts and additional
    data are jsonb columns.
    """

    entity = "transaction"
    table = "transactions"
    model = Transaction
    columns = (
        "type",
        "status",
        "payment_instrument_id",
        "amount",
        "amount_converted",
        "auth_code",
        "rrn",
        "response_code",
        "error_message",
        "remote_id",
        "order_id",
        "three_ds_10",
        "three_ds_20",
        "three_ds_method_url",
        "additional_data",
        "customer",
    )
    json_columns = ("three_ds_10", "three_ds_20", "three_ds_method_url", "additional_data")
    json_types = {
        "three_ds_10": ThreeDSecure10,
        "three_ds_20": ThreeDSecure20,
        "three_ds_method_url": ThreeDSMethodUrl,
    }
    generated = ("created",)
    reference_fields = REFERENCE_FIELDS

    def __init__(
        self,
        pool,
        profile_store: Repository[Profile] = None,
        account_store: Repository[Account] = None,
        instrument_store: Repository[Instrument] = None,
        currency_store: Repository[Currency] = None,
        logger: LoggerFunc = None,
    ):
        super().__init__(pool, logger=logger)
        self.references = self._references(
            profile_store, account_store, instrument_store, currency_store
        )

    def type_turnover(self, ctx: Context, specification: Specification) -> dict[str, TurnOver]:
        """Count and amount sum per transaction type over the matching rows."""
        ctx.raise_if_cancelled()
        _check_turnover_specification(specification)
        clause, params = specification.to_sql()

        try:
            rows = db.fetch_all(
                self.pool,
                f"""
                SELECT type, count(id) AS cnt, coalesce(sum(amount), 0) AS total
                FROM transactions {clause}
                GROUP BY type
                """,
                params,
            )
        except psycopg.Error as exc:
            raise StorageError(f"failed to query type turn over rows: {exc}") from exc

        return {row["type"]: TurnOver(row["cnt"], int(row["total"])) for row in rows}
