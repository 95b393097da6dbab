import json
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import quote

from paystore.config import config
from paystore.context import Context
from paystore.errors import SpecificationError, VaultError
from paystore.logs import LoggerFunc
from paystore.models import Session
from paystore.repository import QueryResult
from paystore.specification import ByField, ById, Specification, WithLimitAndOffset
from paystore.store import OrderedMapStore, VaultHttpStore


def session_by_id(session_id: int) -> ById:
    return ById(session_id)


def session_by_key(key: str) -> ByField:
    return ByField("key", key)


def sessions_with_limit_and_offset(limit: int, offset: int) -> WithLimitAndOffset:
    return WithLimitAndOffset(limit, offset)


class OrderedMapSessionStore(OrderedMapStore[Session]):
    """
    In-process session store.

    Sessions expire a fixed TTL after they are added. Expired sessions stay
    stored and reachable through delete/update by id, but query() skips
    them without counting them towards limit/offset.
    """

    entity = "session"
    immutable = ("expires_at",)

    def __init__(
        self,
        records: dict = None,
        ttl: timedelta = None,
        logger: LoggerFunc = None,
    ):
        super().__init__(records, logger=logger)
        self.ttl = ttl if ttl is not None else config.session_ttl

    def prepare(self, record: Session) -> None:
        record.expires_at = datetime.now(timezone.utc) + self.ttl

    def visible(self, record: Session, now: datetime) -> bool:
        return not record.is_expired(now)


def parse_timestamp(value: str) -> datetime:
    """ISO 8601 timestamp from the vault; a trailing Z or a missing offset means UTC."""
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def session_from_json(data: dict[str, Any]) -> Session:
    body = data.get("body")
    expires_at = data.get("expires_at")
    try:
        return Session(
            id=data.get("id"),
            key=data.get("key"),
            data=json.loads(body) if isinstance(body, str) else body,
            expires_at=parse_timestamp(expires_at) if expires_at else None,
        )
    except (TypeError, ValueError) as exc:
        raise VaultError(f"can not decode session: {exc}") from exc


class VaultHttpSessionStore(VaultHttpStore[Session]):
    """
    Sessions kept in the vault. The vault offers create and lookup by key only.

        POST /v1/sessions        key, body (JSON-encoded session data)
        GET  /v1/sessions/{key}
    """

    entity = "session"

    def add(self, ctx: Context, record: Session) -> None:
        ctx.raise_if_cancelled()
        body = {"key": record.key, "body": json.dumps(record.data or {})}
        payload, _ = self.request(ctx, "POST", "v1/sessions", body=body)

        created = session_from_json(payload)
        record.id = created.id
        if created.expires_at is not None:
            record.expires_at = created.expires_at

    def delete(self, ctx: Context, record: Session) -> None:
        raise self.unsupported("delete")

    def update(self, ctx: Context, record: Session) -> None:
        raise self.unsupported("update")

    def query(self, ctx: Context, specification: Specification) -> QueryResult:
        ctx.raise_if_cancelled()
        if not (isinstance(specification, ByField) and specification.field == "key"):
            raise SpecificationError(
                f"sessions can only be looked up by key, got {specification!r}"
            )

        uri = f"v1/sessions/{quote(str(specification.value), safe='')}"
        payload, status = self.request(ctx, "GET", uri)
        if status == 404 or not payload:
            return QueryResult(0, [])

        session = session_from_json(payload)
        if session.is_expired():
            return QueryResult(0, [])
        return QueryResult(1, [session])
