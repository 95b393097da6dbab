"""
Database pool and query utilities.

Relational stores receive a psycopg_pool.ConnectionPool built by the
caller (or by make_pool() from the environment config) and run every
statement through connection(), which checks a connection out of the pool
for the duration of the block and returns it on every exit path.

For testing, use set_connection_override() to inject a connection
that will be used instead of the pool. This enables transaction
rollback between tests.
"""

from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from paystore.config import config

# =============================================================================
# Connection Override (for testing)
# =============================================================================

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    """
    Set a connection to use instead of checking one out of a pool.

    Used by test fixtures to ensure all database operations run
    within a single transaction that can be rolled back.

    Args:
        conn: The connection to use for all subsequent operations
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    """Clear the connection override, restoring normal behavior."""
    global _connection_override
    _connection_override = None


# =============================================================================
# Pool Management
# =============================================================================


def make_pool(dsn: str = None, min_size: int = None, max_size: int = None) -> ConnectionPool:
    """
    Build a connection pool from a DSN, falling back to the config values.

    Raises:
        psycopg_pool.PoolTimeout: if no connection can be opened
    """
    pool = ConnectionPool(
        dsn or config.database_url,
        min_size=min_size or config.db_pool_min_size,
        max_size=max_size or config.db_pool_max_size,
        kwargs={"row_factory": dict_row},
        open=False,
    )
    pool.open(wait=True)
    return pool


@contextmanager
def connection(pool: ConnectionPool):
    """
    Context manager for a pooled connection.

    In normal operation:
        - Checks a connection out of the pool
        - Commits on successful exit
        - Rolls back on exception
        - Returns the connection to the pool when done

    With override set (testing):
        - Returns the override connection
        - Does NOT commit, rollback, or close
        - Caller (test fixture) manages the transaction

    Usage:
        with connection(pool) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute("SELECT ...")
    """
    if _connection_override is not None:
        yield _connection_override
        return

    with pool.connection() as conn:
        yield conn


# =============================================================================
# Query Helpers
# =============================================================================


def fetch_one(pool: ConnectionPool, query: str, params: tuple = None) -> dict[str, Any] | None:
    """
    Execute a query and return a single row as dict.

    Args:
        pool: Pool to check the connection out of
        query: SQL query with %s placeholders
        params: Tuple of parameter values

    Returns:
        Dict of column names to values, or None if no row found
    """
    with connection(pool) as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchone()


def fetch_all(pool: ConnectionPool, query: str, params: tuple = None) -> list[dict[str, Any]]:
    """
    Execute a query and return all rows as list of dicts.

    Returns:
        List of dicts, empty list if no rows found
    """
    with connection(pool) as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchall()
