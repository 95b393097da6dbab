"""
Foreign-key hydration.

Stores read references shallow (only ``id`` set) and hand every batch of
records to hydrate(), which replaces those shallow objects with the records
loaded through the repository that owns them. One ByIds query is issued per
reference field and batch, not one per record.
"""

from typing import Mapping

from paystore.context import Context
from paystore.errors import CancelledError, HydrationError, RepositoryError
from paystore.logs import LoggerFunc, default_logger
from paystore.repository import Repository
from paystore.specification import ByIds


def hydrate(
    ctx: Context,
    records: list,
    references: Mapping[str, Repository],
    logger: LoggerFunc = default_logger,
) -> None:
    """
    Resolve the reference fields of ``records`` in place.

    A reference that is None or carries no id is left alone. An id the
    owning repository does not know stays as the shallow object and is
    logged as unresolved.

    Raises:
        HydrationError: a sub-query failed; the cause is chained
    """
    for field, repository in references.items():
        ids = {
            ref.id
            for ref in (getattr(record, field) for record in records)
            if ref is not None and ref.id is not None
        }
        if not ids:
            continue

        try:
            _, loaded = repository.query(ctx, ByIds(sorted(ids)))
        except CancelledError:
            raise
        except RepositoryError as exc:
            raise HydrationError(f"can not load {field} references: {exc}") from exc

        by_id = {item.id: item for item in loaded}
        for record in records:
            ref = getattr(record, field)
            if ref is None or ref.id is None:
                continue
            if ref.id in by_id:
                setattr(record, field, by_id[ref.id])
            else:
                logger(ctx).warning(
                    "unresolved reference",
                    entity=type(record).__name__,
                    record_id=record.id,
                    field=field,
                    ref_id=ref.id,
                )


def wire(**repositories: Repository | None) -> dict[str, Repository]:
    """Reference field -> owning repository, skipping the ones not given."""
    return {field: repo for field, repo in repositories.items() if repo is not None}
