"""
Partial-update merge shared by every backend.
"""

from dataclasses import fields, replace


def apply_patch(stored, patch, immutable: tuple[str, ...] = ()):
    """
    Return a new record with the non-``None`` fields of ``patch`` laid over
    ``stored``. ``id`` and the ``immutable`` fields always keep the stored
    value. Neither argument is modified.
    """
    keep = {"id", *immutable}
    changes = {
        f.name: getattr(patch, f.name)
        for f in fields(patch)
        if f.name not in keep and getattr(patch, f.name) is not None
    }
    return replace(stored, **changes)


def copy_into(target, source) -> None:
    """Overwrite every field of ``target`` with the value held by ``source``."""
    for f in fields(source):
        setattr(target, f.name, getattr(source, f.name))
