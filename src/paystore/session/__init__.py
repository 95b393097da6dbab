"""
Session

Short-lived payment sessions (e.g. 3-D Secure state) keyed by an opaque key.
A session expires a fixed TTL after creation and is then hidden from queries.
"""

from paystore.session.repository import (
    OrderedMapSessionStore,
    VaultHttpSessionStore,
    session_by_id,
    session_by_key,
    session_from_json,
    sessions_with_limit_and_offset,
)

__all__ = [
    "OrderedMapSessionStore",
    "VaultHttpSessionStore",
    "session_by_id",
    "session_by_key",
    "session_from_json",
    "sessions_with_limit_and_offset",
]
