"""
Repository contract shared by every entity and backend.

Handlers depend on this interface only; which backend sits behind it
(ordered map, Postgres, vault) is decided when the stores are wired up.
"""

from abc import ABC, abstractmethod
from typing import Generic, NamedTuple, TypeVar

from paystore.context import Context
from paystore.specification import Specification

T = TypeVar("T")


class QueryResult(NamedTuple):
    """``total`` counts every stored record, ``items`` only the matches."""

    total: int
    items: list


class Repository(ABC, Generic[T]):
    """
    Add/Delete/Update/Query over one entity type.

    Mutations work on the caller's record in place:
        - add() assigns the id and any server-generated fields
        - delete() fills the record with the values it held before removal
        - update() merges the non-None fields into the stored record and
          leaves the full merged state in the caller's record

    Raises:
        NotFoundError: delete()/update() on an unknown id
        RepositoryError: any other backend failure
    """

    entity = "record"

    @abstractmethod
    def add(self, ctx: Context, record: T) -> None:
        pass

    @abstractmethod
    def delete(self, ctx: Context, record: T) -> None:
        pass

    @abstractmethod
    def update(self, ctx: Context, record: T) -> None:
        pass

    @abstractmethod
    def query(self, ctx: Context, specification: Specification) -> QueryResult:
        pass
