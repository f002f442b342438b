"""
Oracle type translation.

Two independent translations per column:
- to_sql_type(): Oracle type -> PostgreSQL column type
- to_property_type(): Oracle type -> C# property type (nullable-aware)

Rules are plain data evaluated in a fixed order: exact type name first, then
suffix patterns (parameterized TIMESTAMP / INTERVAL types), then passthrough.
A passthrough result is flagged `unmapped` so callers can warn about it.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

import yaml

from .errors import ConfigurationError
from .models import Column, MappedType

logger = logging.getLogger(__name__)


class TypeRequest(NamedTuple):
    source_type: str
    length: int = 0
    precision: int = 0
    scale: int = 0
    nullable: bool = True
    match: Optional["re.Match"] = None


Rule = Callable[[TypeRequest], str]


# ============================================================================
# NUMBER bucketing
# ============================================================================

INT16, INT32, INT64, DECIMAL_P, DECIMAL_PS, DECIMAL = (
    "int16", "int32", "int64", "decimal_p", "decimal_ps", "decimal",
)


def number_bucket(precision: int, scale: int) -> str:
    """Classify an Oracle NUMBER(p,s). Boundaries are half-open: [1,5) [5,9) [9,19) [19,38]."""
    if scale <= 0:
        if 1 <= precision < 5:
            return INT16
        if 5 <= precision < 9:
            return INT32
        if 9 <= precision < 19:
            return INT64
        if 19 <= precision <= 38:
            return DECIMAL_P
    return DECIMAL_PS if precision > 0 else DECIMAL


_NUMBER_SQL = {INT16: "SMALLINT", INT32: "INT", INT64: "BIGINT"}
_NUMBER_PROPERTY = {INT16: "short", INT32: "int", INT64: "long"}


def _number_sql(r: TypeRequest) -> str:
    bucket = number_bucket(r.precision, r.scale)
    if bucket in _NUMBER_SQL:
        return _NUMBER_SQL[bucket]
    if bucket == DECIMAL_P:
        return f"DECIMAL({r.precision})"
    if bucket == DECIMAL_PS:
        return f"DECIMAL({r.precision},{r.scale})"
    return "DECIMAL"


def _number_property(r: TypeRequest) -> str:
    bucket = number_bucket(r.precision, r.scale)
    return _widen(_NUMBER_PROPERTY.get(bucket, "decimal"), r.nullable)


# ============================================================================
# Rule builders
# ============================================================================

_VALUE_TYPES = frozenset({
    "bool", "byte", "sbyte", "char", "short", "ushort", "int", "uint", "long", "ulong",
    "float", "double", "decimal", "DateTime", "DateTimeOffset", "TimeSpan", "Guid",
})


def _widen(type_name: str, nullable: bool) -> str:
    """Make a known C# value type nullable. Classes, arrays and unknown names are left alone."""
    if nullable and type_name in _VALUE_TYPES:
        return f"{type_name}?"
    return type_name


def _fixed(name: str) -> Rule:
    return lambda r: name


def _sized(base: str) -> Rule:
    return lambda r: f"{base}({r.length})" if r.length > 0 else base


def _scaled(base: str) -> Rule:
    return lambda r: f"{base}({r.precision},{r.scale})" if r.precision > 0 else base


def _value(name: str) -> Rule:
    return lambda r: _widen(name, r.nullable)


CHARACTER_TYPES = frozenset({
    "CHAR", "CHARACTER", "NCHAR", "NCHAR VARYING", "VARCHAR", "VARCHAR2", "NVARCHAR2",
    "CLOB", "NCLOB", "LONG",
})

_SQL_EXACT: Dict[str, Rule] = {
    # character
    "CHAR": _sized("CHAR"),
    "CHARACTER": _sized("CHARACTER"),
    "NCHAR": _sized("NCHAR"),
    "NCHAR VARYING": _sized("VARCHAR"),
    "VARCHAR": _sized("VARCHAR"),
    "VARCHAR2": _sized("VARCHAR"),
    "NVARCHAR2": _sized("VARCHAR"),
    "CLOB": _fixed("TEXT"),
    "NCLOB": _fixed("TEXT"),
    "LONG": _fixed("TEXT"),
    # numeric
    "BINARY_FLOAT": _fixed("REAL"),
    "DECIMAL": _scaled("DECIMAL"),
    "DEC": _scaled("DEC"),
    "BINARY_DOUBLE": _fixed("DOUBLE PRECISION"),
    "DOUBLE PRECISION": _fixed("DOUBLE PRECISION"),
    "FLOAT": _fixed("DOUBLE PRECISION"),
    "REAL": _fixed("DOUBLE PRECISION"),
    "INTEGER": _fixed("INTEGER"),
    "INT": _fixed("INTEGER"),
    "NUMBER": _number_sql,
    "SMALLINT": _fixed("SMALLINT"),
    "NUMERIC": _scaled("NUMERIC"),
    # LOB / rowid / xml / cursor
    "BFILE": _fixed("VARCHAR(255)"),
    "ROWID": _fixed("CHARACTER(255)"),
    "UROWID": _sized("VARCHAR"),
    "XMLTYPE": _fixed("XML"),
    "SYS_REFCURSOR": _fixed("REFCURSOR"),
    # date / binary
    "DATE": _fixed("TIMESTAMP"),
    "BLOB": _fixed("BYTEA"),
    "RAW": _fixed("BYTEA"),
    "LONG RAW": _fixed("BYTEA"),
}

_PROPERTY_EXACT: Dict[str, Rule] = {
    **{name: _fixed("string") for name in CHARACTER_TYPES},
    "ROWID": _fixed("string"),
    "UROWID": _fixed("string"),
    "XMLTYPE": _fixed("string"),
    "BINARY_FLOAT": _value("float"),
    "BINARY_DOUBLE": _value("double"),
    "DOUBLE PRECISION": _value("double"),
    "FLOAT": _value("double"),
    "REAL": _value("double"),
    "DECIMAL": _value("decimal"),
    "DEC": _value("decimal"),
    "NUMERIC": _value("decimal"),
    "INTEGER": _value("int"),
    "INT": _value("int"),
    "SMALLINT": _value("short"),
    "NUMBER": _number_property,
    "DATE": _value("DateTime"),
    "BFILE": _fixed("byte[]"),
    "BLOB": _fixed("byte[]"),
    "RAW": _fixed("byte[]"),
    "LONG RAW": _fixed("byte[]"),
}

_TIMESTAMP = r"TIMESTAMP(?:\((\d+)\))?"


def _timestamp(suffix: str = "") -> Rule:
    def rule(r: TypeRequest) -> str:
        digits = r.match.group(1)
        base = f"TIMESTAMP({digits})" if digits else "TIMESTAMP"
        return f"{base}{suffix}"
    return rule


_SQL_PATTERNS: List[Tuple["re.Pattern", Rule]] = [
    (re.compile(rf"^{_TIMESTAMP} WITH LOCAL TIME ZONE$"), _timestamp(" WITH TIME ZONE")),
    (re.compile(rf"^{_TIMESTAMP} WITH TIME ZONE$"), _timestamp(" WITH TIME ZONE")),
    (re.compile(rf"^{_TIMESTAMP}$"), _timestamp()),
    (re.compile(r"^INTERVAL YEAR(?:\((\d+)\))? TO MONTH$"), _fixed("INTERVAL YEAR TO MONTH")),
    (
        re.compile(r"^INTERVAL DAY(?:\((\d+)\))? TO SECOND(?:\((\d+)\))?$"),
        lambda r: f"INTERVAL DAY TO SECOND({r.match.group(2)})" if r.match.group(2) else "INTERVAL DAY TO SECOND",
    ),
]

_PROPERTY_PATTERNS: List[Tuple["re.Pattern", Rule]] = [
    (re.compile(rf"^{_TIMESTAMP} WITH (?:LOCAL )?TIME ZONE$"), _value("DateTimeOffset")),
    (re.compile(rf"^{_TIMESTAMP}$"), _value("DateTime")),
    (re.compile(r"^INTERVAL YEAR\b"), _value("int")),
    (re.compile(r"^INTERVAL DAY\b"), _value("TimeSpan")),
]


def _normalize(source_type: str) -> str:
    return re.sub(r"\s+", " ", (source_type or "").strip()).upper()


# ============================================================================
# Mapper
# ============================================================================

class TypeMapper:
    """Translate Oracle column types. Extra exact-name rules may be supplied as overrides."""

    def __init__(
        self,
        sql_overrides: Optional[Mapping[str, str]] = None,
        property_overrides: Optional[Mapping[str, str]] = None,
    ):
        self._sql_exact = dict(_SQL_EXACT)
        self._property_exact = dict(_PROPERTY_EXACT)
        for name, target in (sql_overrides or {}).items():
            self._sql_exact[_normalize(name)] = _fixed(str(target))
        for name, target in (property_overrides or {}).items():
            self._property_exact[_normalize(name)] = _value(str(target))

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "TypeMapper":
        """Load additional rules from a YAML file with `sql_types` / `property_types` mappings."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not load type rules from {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Type rules in {path} must be a mapping")
        sections = {}
        for key in ("sql_types", "property_types"):
            section = data.get(key) or {}
            if not isinstance(section, dict):
                raise ConfigurationError(f"'{key}' in {path} must be a mapping of type name to target")
            sections[key] = section
        logger.info(
            f"Loaded {len(sections['sql_types'])} SQL and {len(sections['property_types'])} property type rules from {path}"
        )
        return cls(sql_overrides=sections["sql_types"], property_overrides=sections["property_types"])

    @staticmethod
    def _resolve(exact: Dict[str, Rule], patterns: List[Tuple["re.Pattern", Rule]], request: TypeRequest) -> MappedType:
        key = _normalize(request.source_type)
        rule = exact.get(key)
        if rule is not None:
            return MappedType(rule(request))
        for pattern, rule in patterns:
            m = pattern.match(key)
            if m:
                return MappedType(rule(request._replace(match=m)))
        return MappedType(request.source_type, unmapped=True)

    def to_sql_type(self, source_type: str, length: int = 0, precision: int = 0, scale: int = 0) -> MappedType:
        request = TypeRequest(source_type, length, precision, scale)
        return self._resolve(self._sql_exact, _SQL_PATTERNS, request)

    def to_property_type(self, source_type: str, nullable: bool, precision: int = 0, scale: int = 0) -> MappedType:
        request = TypeRequest(source_type, precision=precision, scale=scale, nullable=nullable)
        return self._resolve(self._property_exact, _PROPERTY_PATTERNS, request)

    def sql_type_for(self, column: Column) -> MappedType:
        return self.to_sql_type(column.source_type, column.length, column.precision, column.scale)

    def property_type_for(self, column: Column) -> MappedType:
        return self.to_property_type(column.source_type, column.nullable, column.precision, column.scale)

    @staticmethod
    def is_character_type(source_type: str) -> bool:
        return _normalize(source_type) in CHARACTER_TYPES


DEFAULT_MAPPER = TypeMapper()


def to_target_sql_type(source_type: str, length: int = 0, precision: int = 0, scale: int = 0) -> MappedType:
    return DEFAULT_MAPPER.to_sql_type(source_type, length, precision, scale)


def to_target_property_type(source_type: str, nullable: bool, precision: int = 0, scale: int = 0) -> MappedType:
    return DEFAULT_MAPPER.to_property_type(source_type, nullable, precision, scale)
