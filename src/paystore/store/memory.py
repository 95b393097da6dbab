"""
In-process ordered store.

Records live in an insertion-ordered dict keyed by id. A single lock per
store serializes every operation on that entity type; stores of different
entities lock independently. Reference hydration runs after the lock is
released so a store may reference itself or another locked store.
"""

import copy
import threading
from datetime import datetime, timezone
from typing import Mapping

from paystore.context import Context
from paystore.errors import NotFoundError
from paystore.logs import LoggerFunc, default_logger
from paystore.patch import apply_patch, copy_into
from paystore.repository import QueryResult, Repository, T
from paystore.specification import Specification
from paystore.store.hydration import hydrate


class OrderedMapStore(Repository[T]):
    """
    Generic ordered-map backend.

    Subclasses set ``reference_fields`` (field name -> referenced type) and
    may override the hooks:
        - prepare(record): fill generated fields on add
        - visible(record, now): hide records from query()
    """

    reference_fields: Mapping[str, type] = {}
    immutable: tuple[str, ...] = ()

    def __init__(
        self,
        records: dict = None,
        references: Mapping[str, Repository] = None,
        logger: LoggerFunc = None,
    ):
        self._lock = threading.Lock()
        self._records = records if records is not None else {}
        self._next_id = max(self._records, default=0) + 1
        self.references = dict(references or {})
        self.logger = logger or default_logger

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def prepare(self, record: T) -> None:
        pass

    def visible(self, record: T, now: datetime) -> bool:
        return True

    # -------------------------------------------------------------------------
    # Repository
    # -------------------------------------------------------------------------

    def _shallow(self, record: T) -> T:
        """Deep copy for storage, with reference fields reduced to their id."""
        stored = copy.deepcopy(record)
        for field in self.reference_fields:
            ref = getattr(stored, field)
            if ref is not None:
                setattr(stored, field, type(ref)(id=ref.id))
        return stored

    def add(self, ctx: Context, record: T) -> None:
        ctx.raise_if_cancelled()
        with self._lock:
            record.id = self._next_id
            self.prepare(record)
            self._records[record.id] = self._shallow(record)
            self._next_id += 1

        self.logger(ctx).debug("record added", entity=self.entity, id=record.id)

    def delete(self, ctx: Context, record: T) -> None:
        ctx.raise_if_cancelled()
        with self._lock:
            deleted = self._records.pop(record.id, None)

        if deleted is None:
            raise NotFoundError(f"{self.entity} with id={record.id} not found")

        copy_into(record, deleted)
        self.logger(ctx).debug("record deleted", entity=self.entity, id=record.id)
        hydrate(ctx, [record], self.references, self.logger)

    def update(self, ctx: Context, record: T) -> None:
        ctx.raise_if_cancelled()
        with self._lock:
            stored = self._records.get(record.id)
            if stored is None:
                raise NotFoundError(f"{self.entity} with id={record.id} not found")

            merged = self._shallow(apply_patch(stored, record, self.immutable))
            self._records[record.id] = merged
            current = copy.deepcopy(merged)

        copy_into(record, current)
        self.logger(ctx).debug("record updated", entity=self.entity, id=record.id)
        hydrate(ctx, [record], self.references, self.logger)

    def query(self, ctx: Context, specification: Specification) -> QueryResult:
        ctx.raise_if_cancelled()
        now = datetime.now(timezone.utc)
        matches = []
        with self._lock:
            total = len(self._records)
            position = 0
            for record in self._records.values():
                if not self.visible(record, now):
                    continue
                if specification.specified(record, position):
                    matches.append(copy.deepcopy(record))
                position += 1

        hydrate(ctx, matches, self.references, self.logger)
        return QueryResult(total, matches)
