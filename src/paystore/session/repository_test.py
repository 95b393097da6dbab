"""
Tests for the session stores.
"""
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from paystore.errors import NotFoundError, SpecificationError, UnsupportedOperationError, VaultError
from paystore.models import Session, new_session
from paystore.session import (
    OrderedMapSessionStore,
    VaultHttpSessionStore,
    session_by_id,
    session_by_key,
    sessions_with_limit_and_offset,
)
from paystore.specification import All


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def mixed_store():
    """One expired session between live ones, preloaded in insertion order."""
    past, future = utcnow() - timedelta(minutes=1), utcnow() + timedelta(hours=1)
    return OrderedMapSessionStore(records={
        1: Session(id=1, key="expired", data={}, expires_at=past),
        2: Session(id=2, key="live-1", data={}, expires_at=future),
        3: Session(id=3, key="live-2", data={}, expires_at=future),
    })


class TestOrderedMapSessionStore:
    """Tests for OrderedMapSessionStore"""

    def test_add_stamps_expiry(self, ctx):
        store = OrderedMapSessionStore(ttl=timedelta(minutes=5))
        session = new_session("s1", {"step": "3ds"})
        before = utcnow()

        store.add(ctx, session)

        assert session.id == 1
        assert before + timedelta(minutes=5) <= session.expires_at <= utcnow() + timedelta(minutes=5)

    def test_query_by_key(self, ctx):
        store = OrderedMapSessionStore()
        store.add(ctx, new_session("s1", {"a": 1}))
        store.add(ctx, new_session("s2", {"b": 2}))

        _, items = store.query(ctx, session_by_key("s2"))

        assert [s.data for s in items] == [{"b": 2}]

    def test_expired_sessions_hidden(self, ctx):
        store = OrderedMapSessionStore(ttl=timedelta(seconds=-1))
        store.add(ctx, new_session("s1", {}))

        total, items = store.query(ctx, session_by_key("s1"))

        assert total == 1
        assert items == []

    def test_expired_sessions_do_not_count_towards_offset(self, ctx, mixed_store):
        _, first = mixed_store.query(ctx, sessions_with_limit_and_offset(1, 0))
        _, second = mixed_store.query(ctx, sessions_with_limit_and_offset(1, 1))

        assert [s.key for s in first] == ["live-1"]
        assert [s.key for s in second] == ["live-2"]

    def test_expired_session_still_reachable_by_id(self, ctx, mixed_store):
        _, items = mixed_store.query(ctx, session_by_id(1))
        assert items == []

        session = Session(id=1, data={"touched": True})
        mixed_store.update(ctx, session)
        assert session.key == "expired"

        mixed_store.delete(ctx, Session(id=1))
        with pytest.raises(NotFoundError):
            mixed_store.delete(ctx, Session(id=1))

    def test_update_keeps_expiry(self, ctx):
        store = OrderedMapSessionStore()
        session = new_session("s1", {})
        store.add(ctx, session)
        expires_at = session.expires_at

        patch = Session(id=session.id, expires_at=utcnow() + timedelta(days=30))
        store.update(ctx, patch)

        assert patch.expires_at == expires_at


class FakeVault:
    def __init__(self, *responses):
        self.requests = []
        self.responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)

    def store(self) -> VaultHttpSessionStore:
        client = httpx.Client(transport=httpx.MockTransport(self))
        return VaultHttpSessionStore(url="http://vault.test", client=client)


def session_json(expires_at: datetime) -> dict:
    return {
        "id": 3,
        "key": "sess-1",
        "body": json.dumps({"acs_url": "https://acs"}),
        "expires_at": expires_at.isoformat(),
    }


class TestVaultHttpSessionStore:
    """Tests for VaultHttpSessionStore"""

    def test_add(self, ctx):
        expires_at = utcnow() + timedelta(minutes=15)
        vault = FakeVault(httpx.Response(200, json=session_json(expires_at)))
        session = new_session("sess-1", {"acs_url": "https://acs"})

        vault.store().add(ctx, session)

        request = vault.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/sessions"
        body = json.loads(request.content)
        assert body["key"] == "sess-1"
        assert json.loads(body["body"]) == {"acs_url": "https://acs"}
        assert session.id == 3
        assert session.expires_at == expires_at

    def test_query_by_key(self, ctx):
        vault = FakeVault(httpx.Response(200, json=session_json(utcnow() + timedelta(minutes=5))))

        total, items = vault.store().query(ctx, session_by_key("sess-1"))

        assert vault.requests[0].url.path == "/v1/sessions/sess-1"
        assert total == 1
        assert items[0].data == {"acs_url": "https://acs"}

    def test_query_unknown_key(self, ctx):
        vault = FakeVault(httpx.Response(404))

        assert vault.store().query(ctx, session_by_key("missing")) == (0, [])

    def test_query_filters_expired(self, ctx):
        vault = FakeVault(httpx.Response(200, json=session_json(utcnow() - timedelta(minutes=5))))

        assert vault.store().query(ctx, session_by_key("sess-1")) == (0, [])

    @pytest.mark.parametrize("expires_at", ["2099-01-01T00:00:00", "2099-01-01T00:00:00Z"])
    def test_timestamp_without_offset_is_utc(self, ctx, expires_at):
        body = {"id": 3, "key": "k", "body": "{}", "expires_at": expires_at}
        vault = FakeVault(httpx.Response(200, json=body))

        total, items = vault.store().query(ctx, session_by_key("k"))

        assert total == 1
        assert items[0].expires_at == datetime(2099, 1, 1, tzinfo=timezone.utc)

    def test_malformed_timestamp(self, ctx):
        body = {"id": 3, "key": "k", "body": "{}", "expires_at": 1700000000}
        vault = FakeVault(httpx.Response(200, json=body))

        with pytest.raises(VaultError):
            vault.store().query(ctx, session_by_key("k"))

    @pytest.mark.parametrize("spec", [All(), session_by_id(3), sessions_with_limit_and_offset(1, 0)])
    def test_query_needs_key(self, ctx, spec):
        vault = FakeVault()

        with pytest.raises(SpecificationError):
            vault.store().query(ctx, spec)

        assert vault.requests == []

    @pytest.mark.parametrize("operation", ["delete", "update"])
    def test_not_offered(self, ctx, operation):
        with pytest.raises(UnsupportedOperationError):
            getattr(FakeVault().store(), operation)(ctx, Session(id=3))
