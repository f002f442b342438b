"""
Run the whole translation: catalog rows -> Schema -> DDL, entities, mappings, DbContext.

The three table-level emitters only read the Schema, so they can run on a
thread pool (max_workers > 1) without coordination.
"""

import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .builder import SchemaGraphBuilder
from .emitters import ContextAggregator, DdlEmitter, EntityEmitter, MappingEmitter, get_emitter
from .emitters.mapping import DEFAULT_CONNECTION_NAME, DEFAULT_CONTEXT_NAME
from .errors import InvalidRowError, UnmappedTypeWarning
from .models import RawMetadataRow, Schema
from .type_mapper import DEFAULT_MAPPER, TypeMapper

logger = logging.getLogger(__name__)


@dataclass
class TranslationReport:
    """Problems found during a run. None of them stop emission."""

    unmapped_types: List[UnmappedTypeWarning] = field(default_factory=list)
    rejected_rows: List[InvalidRowError] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.unmapped_types or self.rejected_rows)

    def unmapped_type_names(self) -> List[str]:
        """Distinct unmapped source type names, sorted."""
        return sorted({w.source_type for w in self.unmapped_types})

    def summary(self) -> Dict[str, int]:
        return {"unmapped_types": len(self.unmapped_types), "rejected_rows": len(self.rejected_rows)}


@dataclass(frozen=True)
class TranslationResult:
    schema: Schema
    ddl: str
    entities: Dict[str, str]
    mappings: Dict[str, str]
    context: str
    context_name: str
    report: TranslationReport


def collect_unmapped_types(schema: Schema, type_mapper: Optional[TypeMapper] = None) -> List[UnmappedTypeWarning]:
    """One warning per column and target (sql/property) whose type matched no rule."""
    type_mapper = type_mapper or DEFAULT_MAPPER
    warnings_found: List[UnmappedTypeWarning] = []
    for table in schema.tables:
        for column in table.columns:
            if type_mapper.sql_type_for(column).unmapped:
                warnings_found.append(UnmappedTypeWarning(column.source_type, "sql", table.name, column.name))
            if type_mapper.property_type_for(column).unmapped:
                warnings_found.append(UnmappedTypeWarning(column.source_type, "property", table.name, column.name))
    return warnings_found


def translate(
    rows: Iterable[RawMetadataRow],
    type_mapper: Optional[TypeMapper] = None,
    source_schema: Optional[str] = None,
    context_name: str = DEFAULT_CONTEXT_NAME,
    connection_name: str = DEFAULT_CONNECTION_NAME,
    strict: bool = False,
    max_workers: int = 1,
) -> TranslationResult:
    """Translate a complete batch of catalog rows into every artifact."""
    type_mapper = type_mapper or DEFAULT_MAPPER

    logger.info("Building schema graph...")
    schema = SchemaGraphBuilder(strict=strict).build(rows)
    logger.info(f"Schema has {len(schema)} tables")

    emitters = {
        "ddl": get_emitter(DdlEmitter.name, type_mapper=type_mapper, source_schema=source_schema),
        "entities": get_emitter(EntityEmitter.name, type_mapper=type_mapper),
        "mappings": get_emitter(MappingEmitter.name, type_mapper=type_mapper),
    }
    if max_workers > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {key: executor.submit(emitter.emit, schema) for key, emitter in emitters.items()}
            outputs = {key: future.result() for key, future in futures.items()}
    else:
        outputs = {}
        for key, emitter in emitters.items():
            logger.info(f"Generating {key}...")
            outputs[key] = emitter.emit(schema)

    logger.info("Generating DbContext with mappings...")
    context = ContextAggregator(context_name, connection_name).aggregate(schema.table_names())

    report = TranslationReport(
        unmapped_types=collect_unmapped_types(schema, type_mapper),
        rejected_rows=list(schema.rejected_rows),
    )
    for warning in report.unmapped_types:
        logger.warning(str(warning))
    if report.rejected_rows:
        logger.warning(f"{len(report.rejected_rows)} catalog row(s) were rejected")

    return TranslationResult(
        schema=schema,
        ddl=outputs["ddl"],
        entities=outputs["entities"],
        mappings=outputs["mappings"],
        context=context,
        context_name=context_name,
        report=report,
    )
