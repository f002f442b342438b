"""Source catalog readers."""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from .base import CatalogReader
from .oracle import OracleCatalogReader

_READERS = {
    "oracle": OracleCatalogReader,
}


def get_engine(database_url: str) -> Engine:
    """Create a SQLAlchemy engine from a database URL with connection pooling."""
    return create_engine(database_url, pool_size=5, max_overflow=10, pool_pre_ping=True, echo=False)


def get_reader(dialect_name: str) -> Optional[CatalogReader]:
    """Get the catalog reader for the given dialect name.

    Args:
        dialect_name: SQLAlchemy dialect name (e.g. oracle).

    Returns:
        CatalogReader instance or None if dialect is not supported.
    """
    reader_cls = _READERS.get(dialect_name)
    if reader_cls is None:
        return None
    return reader_cls()


def get_reader_for_engine(engine: Engine) -> Optional[CatalogReader]:
    """Get the catalog reader for the given engine."""
    return get_reader(engine.dialect.name)


def supported_dialects() -> tuple:
    """Return tuple of supported dialect names."""
    return tuple(_READERS.keys())


__all__ = [
    "CatalogReader",
    "OracleCatalogReader",
    "get_engine",
    "get_reader",
    "get_reader_for_engine",
    "supported_dialects",
]
