from typing import Any

from paystore.context import Context
from paystore.errors import NotFoundError, VaultError
from paystore.models import PAN, Card, format_exp_date, parse_exp_date
from paystore.repository import QueryResult
from paystore.security import generate_token
from paystore.specification import ByField, ById, Specification, WithLimitAndOffset
from paystore.store import OrderedMapStore, VaultHttpStore


class ByPAN(ByField):
    def __init__(self, pan: str | PAN):
        super().__init__("pan", pan if isinstance(pan, PAN) else PAN(pan))

    def to_query_params(self) -> dict[str, Any]:
        return {"pan": self.value.number, "limit": 1}

    def __repr__(self) -> str:
        return f"ByPAN({self.value})"


def card_by_id(card_id: int) -> ById:
    return ById(card_id)


def card_by_pan(pan: str | PAN) -> ByPAN:
    return ByPAN(pan)


def cards_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


class OrderedMapCardStore(OrderedMapStore[Card]):
    """In-process card store; issues the access token on add."""

    entity = "card"
    immutable = ("token",)

    def prepare(self, record: Card) -> None:
        record.token = generate_token()


def card_from_json(data: dict[str, Any]) -> Card:
    exp_date = data.get("exp_date")
    try:
        return Card(
            id=data.get("id"),
            token=data.get("token"),
            pan=data.get("pan"),
            exp_date=parse_exp_date(exp_date) if exp_date else None,
            holder=data.get("holder"),
        )
    except (TypeError, ValueError) as exc:
        raise VaultError(f"can not decode card: {exc}") from exc


def _merge_response(card: Card, data: dict[str, Any]) -> None:
    decoded = card_from_json(data)
    for name in ("id", "token", "pan", "exp_date", "holder"):
        value = getattr(decoded, name)
        if value is not None:
            setattr(card, name, value)


class VaultHttpCardStore(VaultHttpStore[Card]):
    """
    Cards kept in the PCI vault.

        POST   /v1/cards          pan, exp_date (YY/MM), holder
        DELETE /v1/cards/{id}
        GET    /v1/cards?pan=...&limit=1 | ?limit=...&offset=...
    """

    entity = "card"

    def add(self, ctx: Context, record: Card) -> None:
        ctx.raise_if_cancelled()
        body = {
            "pan": record.pan.number if record.pan is not None else None,
            "exp_date": format_exp_date(record.exp_date) if record.exp_date else None,
            "holder": record.holder,
        }
        payload, _ = self.request(ctx, "POST", "v1/cards", body=body)
        if payload.get("id") is None:
            raise VaultError("add card response has no id")
        _merge_response(record, payload)

    def delete(self, ctx: Context, record: Card) -> None:
        ctx.raise_if_cancelled()
        payload, status = self.request(ctx, "DELETE", f"v1/cards/{record.id}")
        if status == 404:
            raise NotFoundError(f"card with id={record.id} not found")
        if status != 200:
            raise VaultError(
                f"failed to make delete card request. Http status: {status}",
                status_code=status,
            )
        _merge_response(record, payload)

    def update(self, ctx: Context, record: Card) -> None:
        raise self.unsupported("update")

    def query(self, ctx: Context, specification: Specification) -> QueryResult:
        ctx.raise_if_cancelled()
        params = specification.to_query_params()
        payload, _ = self.request(ctx, "GET", "v1/cards", params=params)

        if "data" not in payload:
            raise VaultError("card query response has no list")
        rows = payload["data"]
        if not isinstance(rows, list):
            raise VaultError("card query response list has wrong type")

        cards = [card_from_json(row) for row in rows]
        return QueryResult(payload.get("total", len(cards)), cards)
