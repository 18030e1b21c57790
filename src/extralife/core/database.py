"""Oracle connection pool management and collection handles."""

from __future__ import annotations

import logging

import oracledb

from extralife.core.config import Settings
from extralife.core.errors import ConnectionFailure
from extralife.repositories.base import DocumentCollection

logger = logging.getLogger(__name__)

# Module-level pool reference
_pool: oracledb.ConnectionPool | None = None
_thick_mode = False


def _enable_thick_mode(settings: Settings) -> None:
    """SODA collections are only available in python-oracledb thick mode."""
    global _thick_mode
    if _thick_mode:
        return
    oracledb.init_oracle_client(lib_dir=settings.oracle_client_lib_dir or None)
    _thick_mode = True


def init_pool(settings: Settings) -> oracledb.ConnectionPool:
    """Create and return the Oracle connection pool."""
    global _pool
    if _pool is not None:
        return _pool

    logger.info("Creating Oracle connection pool: %s", settings.oracle_dsn)
    try:
        _enable_thick_mode(settings)
        _pool = oracledb.create_pool(
            user=settings.oracle_user,
            password=settings.oracle_password,
            dsn=settings.oracle_dsn,
            min=settings.oracle_pool_min,
            max=settings.oracle_pool_max,
            increment=settings.oracle_pool_increment,
        )
    except oracledb.Error as exc:
        raise ConnectionFailure(f"Could not create pool for {settings.oracle_dsn}: {exc}") from exc
    logger.info(
        "Oracle connection pool created (min=%d, max=%d)",
        settings.oracle_pool_min,
        settings.oracle_pool_max,
    )
    return _pool


def close_pool() -> None:
    """Close the Oracle connection pool."""
    global _pool
    if _pool is not None:
        _pool.close(force=True)
        _pool = None
        logger.info("Oracle connection pool closed")


def get_pool() -> oracledb.ConnectionPool:
    """Get the current connection pool. Raises if not initialized."""
    if _pool is None:
        raise ConnectionFailure("Database pool not initialized. Call init_pool() first.")
    return _pool


def open_collection(
    pool: oracledb.ConnectionPool,
    name: str,
    *,
    call_timeout_ms: int = 0,
) -> DocumentCollection:
    """Open (creating if needed) the SODA collection *name*."""
    try:
        conn = pool.acquire()
    except oracledb.Error as exc:
        raise ConnectionFailure(f"Could not acquire a connection: {exc}") from exc
    try:
        collection = conn.getSodaDatabase().createCollection(name)
        if collection is None:
            raise ConnectionFailure(f"Collection {name} could not be opened")
    except oracledb.Error as exc:
        raise ConnectionFailure(f"Could not open collection {name}: {exc}") from exc
    finally:
        conn.close()

    logger.info("Opened collection %s", name)
    return DocumentCollection(pool=pool, collection_name=name, call_timeout_ms=call_timeout_ms)
