"""
Repository error hierarchy.

Every backend wraps the failure of its underlying storage (lock, row scan,
network, JSON decode) in one of these, chaining the original exception.
Callers translate ``not_found`` into a 404 and anything else into a 5xx.
"""


class RepositoryError(Exception):
    """Base class for all repository failures."""

    not_found = False


class NotFoundError(RepositoryError):
    """No record with the requested identifier."""

    not_found = True


class StorageError(RepositoryError):
    """The relational backend failed (pool, statement, row scan)."""


class VaultError(RepositoryError):
    """The vault call failed (transport, status, body decode)."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class SpecificationError(RepositoryError):
    """A specification is invalid or cannot be rendered by a backend."""


class UnsupportedOperationError(RepositoryError):
    """The backend protocol does not offer this operation."""


class CancelledError(RepositoryError):
    """The request context was cancelled before the operation started."""


class HydrationError(RepositoryError):
    """Resolving a reference field through its owning repository failed."""
