"""
Storage backends.

- OrderedMapStore: in-process, insertion ordered, one lock per store
- RelationalStore: Postgres through a psycopg connection pool
- VaultHttpStore: JSON over HTTP to the card/session vault
"""

from paystore.store.hydration import hydrate, wire
from paystore.store.memory import OrderedMapStore
from paystore.store.relational import RelationalStore
from paystore.store.vault import VaultHttpStore, make_vault_client

__all__ = [
    "OrderedMapStore",
    "RelationalStore",
    "VaultHttpStore",
    "hydrate",
    "wire",
    "make_vault_client",
]
