"""Oracle catalog -> PostgreSQL DDL and Entity Framework 6 code generation."""

from .builder import SchemaGraphBuilder, build_schema
from .errors import ConfigurationError, InvalidRowError, TranslatorError, UnmappedTypeWarning
from .models import Column, MappedType, RawMetadataRow, Schema, Table
from .pipeline import TranslationReport, TranslationResult, translate
from .type_mapper import TypeMapper, to_target_property_type, to_target_sql_type

__version__ = "0.1.0"

__all__ = [
    "Column",
    "ConfigurationError",
    "InvalidRowError",
    "MappedType",
    "RawMetadataRow",
    "Schema",
    "SchemaGraphBuilder",
    "Table",
    "TranslationReport",
    "TranslationResult",
    "TranslatorError",
    "TypeMapper",
    "UnmappedTypeWarning",
    "build_schema",
    "to_target_property_type",
    "to_target_sql_type",
    "translate",
]
