"""
Postgres-backed store.

Each entity maps to one table with an auto-generated ``id``, one column per
scalar field and one ``<field>_id`` column per reference field. Every
statement binds its values as parameters; the specification contributes a
clause with placeholders, never literal values.

query() checks one connection out of the pool for the count and the select
and releases it before hydration. add()/update()/delete() are a single
statement each; the hydration that follows is a separate round trip and
may observe writes made in between.
"""

from typing import Any, Mapping

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool

from paystore import db
from paystore.context import Context
from paystore.errors import NotFoundError, StorageError
from paystore.logs import LoggerFunc, default_logger
from paystore.patch import copy_into
from paystore.repository import QueryResult, Repository, T
from paystore.specification import Specification
from paystore.store.hydration import hydrate


class RelationalStore(Repository[T]):
    """
    Generic table-backed store.

    Subclasses declare:
        table: table name
        model: record dataclass
        columns: scalar columns, named after the record fields
        json_columns: columns stored as jsonb
        json_types: column -> artifact class with to_dict()/from_dict()
        generated: columns filled by the database on insert
        reference_fields: field -> referenced type, stored as <field>_id
    """

    table: str = ""
    model: type = None
    columns: tuple[str, ...] = ()
    json_columns: tuple[str, ...] = ()
    json_types: Mapping[str, type] = {}
    generated: tuple[str, ...] = ()
    reference_fields: Mapping[str, type] = {}

    def __init__(
        self,
        pool: ConnectionPool,
        references: Mapping[str, Repository] = None,
        logger: LoggerFunc = None,
    ):
        self.pool = pool
        self.references = dict(references or {})
        self.logger = logger or default_logger

    # -------------------------------------------------------------------------
    # Row mapping
    # -------------------------------------------------------------------------

    @property
    def select_list(self) -> str:
        names = ["id", *self.columns, *self.generated]
        names += [f"{field}_id" for field in self.reference_fields]
        return ", ".join(names)

    def _dump(self, column: str, value: Any) -> Any:
        if value is None or column not in self.json_columns:
            return value
        if hasattr(value, "to_dict"):
            value = value.to_dict()
        return Jsonb(value)

    def _load(self, column: str, value: Any) -> Any:
        if value is not None and column in self.json_types:
            return self.json_types[column].from_dict(value)
        return value

    def to_row(self, record: T) -> dict[str, Any]:
        """Column -> bound value for insert and update."""
        row = {column: self._dump(column, getattr(record, column)) for column in self.columns}
        for field in self.reference_fields:
            ref = getattr(record, field)
            row[f"{field}_id"] = ref.id if ref is not None else None
        return row

    def from_row(self, row: dict[str, Any]) -> T:
        """Build a record whose references are shallow."""
        values = {"id": row["id"]}
        for column in (*self.columns, *self.generated):
            values[column] = self._load(column, row[column])
        for field, ref_type in self.reference_fields.items():
            ref_id = row[f"{field}_id"]
            values[field] = ref_type(id=ref_id) if ref_id is not None else None
        return self.model(**values)

    # -------------------------------------------------------------------------
    # Repository
    # -------------------------------------------------------------------------

    def add(self, ctx: Context, record: T) -> None:
        ctx.raise_if_cancelled()
        row = self.to_row(record)
        returning = ", ".join(["id", *self.generated])
        query = (
            f"insert into {self.table} ({', '.join(row)}) "
            f"values ({', '.join(['%s'] * len(row))}) returning {returning}"
        )

        try:
            result = db.fetch_one(self.pool, query, tuple(row.values()))
        except psycopg.Error as exc:
            raise StorageError(f"failed to insert into {self.table}: {exc}") from exc

        record.id = result["id"]
        for column in self.generated:
            setattr(record, column, result[column])
        self.logger(ctx).debug("record added", entity=self.entity, id=record.id)

    def delete(self, ctx: Context, record: T) -> None:
        ctx.raise_if_cancelled()
        query = f"delete from {self.table} where id = %s returning {self.select_list}"

        try:
            result = db.fetch_one(self.pool, query, (record.id,))
        except psycopg.Error as exc:
            raise StorageError(f"failed to delete from {self.table}: {exc}") from exc

        if result is None:
            raise NotFoundError(f"{self.entity} with id={record.id} not found")

        copy_into(record, self.from_row(result))
        self.logger(ctx).debug("record deleted", entity=self.entity, id=record.id)
        hydrate(ctx, [record], self.references, self.logger)

    def update(self, ctx: Context, record: T) -> None:
        ctx.raise_if_cancelled()
        row = self.to_row(record)
        assignments = ", ".join(f"{column} = coalesce(%s, {column})" for column in row)
        query = (
            f"update {self.table} set {assignments} "
            f"where id = %s returning {self.select_list}"
        )

        try:
            result = db.fetch_one(self.pool, query, (*row.values(), record.id))
        except psycopg.Error as exc:
            raise StorageError(f"failed to update {self.table}: {exc}") from exc

        if result is None:
            raise NotFoundError(f"{self.entity} with id={record.id} not found")

        copy_into(record, self.from_row(result))
        self.logger(ctx).debug("record updated", entity=self.entity, id=record.id)
        hydrate(ctx, [record], self.references, self.logger)

    def query(self, ctx: Context, specification: Specification) -> QueryResult:
        ctx.raise_if_cancelled()
        clause, params = specification.to_sql()

        try:
            with db.connection(self.pool) as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(f"select count(*) as cnt from {self.table}")
                    total = cur.fetchone()["cnt"]
                    cur.execute(
                        f"select {self.select_list} from {self.table} {clause}",
                        params,
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise StorageError(f"failed to query {self.table} rows: {exc}") from exc

        records = [self.from_row(row) for row in rows]
        hydrate(ctx, records, self.references, self.logger)
        return QueryResult(total, records)

