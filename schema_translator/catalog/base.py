"""
Catalog reader base class.

A reader runs the dialect's catalog join and returns the raw, denormalized
rows the SchemaGraphBuilder consumes. Readers do no de-duplication.
"""

from abc import ABC, abstractmethod
from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ..models import RawMetadataRow


class CatalogReader(ABC):
    """Abstract base for source catalog readers."""

    @abstractmethod
    def catalog_query(self) -> str:
        """Return the catalog join query. Must accept a :schema bind parameter."""
        pass

    @abstractmethod
    def normalize_schema(self, schema: str) -> str:
        """Return the owner/schema name as the catalog stores it."""
        pass

    def fetch_rows(self, engine: Engine, schema: str) -> List[RawMetadataRow]:
        """Execute the catalog query and convert each result row."""
        with engine.connect() as conn:
            result = conn.execute(text(self.catalog_query()), {"schema": self.normalize_schema(schema)})
            return [RawMetadataRow.from_mapping(row._mapping) for row in result]
