"""Oracle catalog reader."""

import logging

from .base import CatalogReader

logger = logging.getLogger(__name__)

# One row per column x constraint x referenced constraint; PK and FK columns fan out.
CATALOG_QUERY = """
    SELECT DISTINCT * FROM (
        SELECT ccols.POSITION,
               cols.COLUMN_ID,
               cols.TABLE_NAME,
               cols.COLUMN_NAME,
               cols.DATA_TYPE,
               cols.DATA_LENGTH,
               cols.NULLABLE,
               cols.DATA_PRECISION,
               cols.DATA_SCALE,
               cons.CONSTRAINT_TYPE,
               rcons.CONSTRAINT_NAME AS R_CONSTRAINT_NAME,
               rcons.TABLE_NAME AS R_TABLE_NAME
        FROM ALL_TAB_COLUMNS cols
        LEFT JOIN ALL_CONS_COLUMNS ccols
            ON cols.TABLE_NAME = ccols.TABLE_NAME
            AND cols.COLUMN_NAME = ccols.COLUMN_NAME
            AND ccols.OWNER = :schema
        LEFT JOIN ALL_CONSTRAINTS cons
            ON ccols.CONSTRAINT_NAME = cons.CONSTRAINT_NAME
            AND cons.OWNER = :schema
        LEFT JOIN ALL_CONSTRAINTS rcons
            ON cons.R_CONSTRAINT_NAME = rcons.CONSTRAINT_NAME
            AND rcons.OWNER = :schema
        WHERE cols.OWNER = :schema
            AND cols.TABLE_NAME NOT LIKE 'BIN$%'
    )
    ORDER BY TABLE_NAME, COLUMN_ID
"""


class OracleCatalogReader(CatalogReader):
    """Oracle catalog reader over ALL_TAB_COLUMNS / ALL_CONS_COLUMNS / ALL_CONSTRAINTS."""

    def catalog_query(self) -> str:
        return CATALOG_QUERY

    def normalize_schema(self, schema: str) -> str:
        return (schema or "").strip().upper()
