"""
Oracle -> PostgreSQL schema translator.

Reads an Oracle schema's catalog and writes:
- a PostgreSQL CREATE TABLE script
- one C# entity class per table
- one EF6 mapping class per table, plus a DbContext registering them

Usage:
    schema-translator [database_url] [schema] [--output-dir DIR]
"""

import argparse
import logging
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .catalog import get_engine, get_reader_for_engine, supported_dialects
from .config import TranslatorConfig, load_config, load_env
from .errors import ConfigurationError, TranslatorError
from .pipeline import TranslationResult, translate
from .sink import ArtifactSink
from .type_mapper import DEFAULT_MAPPER, TypeMapper

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-translator",
        description="Translate an Oracle schema into PostgreSQL DDL and EF6 entity/mapping classes",
    )
    parser.add_argument("database_url", nargs="?", default=None, help="Oracle SQLAlchemy URL (default: ORACLE_URL)")
    parser.add_argument("schema", nargs="?", default=None, help="Oracle owner to translate (default: SCHEMA)")
    parser.add_argument("--output-dir", default=None, help="Artifact root folder (default: OUTPUT_DIR or ./output)")
    parser.add_argument("--context-name", default=None, help="Generated DbContext class name")
    parser.add_argument("--connection-name", default=None, help="Connection string name bound by the DbContext")
    parser.add_argument("--type-rules", default=None, help="YAML file with extra sql_types/property_types rules")
    parser.add_argument("--workers", type=int, default=1, help="Run the emitters on N threads")
    parser.add_argument("--strict", action="store_true", help="Fail on the first invalid catalog row")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def run(config: TranslatorConfig, workers: int = 1, strict: bool = False) -> TranslationResult:
    """Read the catalog, translate, and persist every artifact."""
    type_mapper = TypeMapper.from_yaml(config.type_rules_path) if config.type_rules_path else DEFAULT_MAPPER

    engine = get_engine(config.database_url)
    try:
        reader = get_reader_for_engine(engine)
        if reader is None:
            raise ConfigurationError(
                f"Unsupported source dialect '{engine.dialect.name}'; supported: {', '.join(supported_dialects())}"
            )
        logger.info(f"Reading catalog for schema {config.schema}...")
        rows = reader.fetch_rows(engine, config.schema)
        logger.info(f"Fetched {len(rows)} catalog rows")
    finally:
        engine.dispose()

    result = translate(
        rows,
        type_mapper=type_mapper,
        source_schema=config.schema,
        context_name=config.context_name,
        connection_name=config.connection_name,
        strict=strict,
        max_workers=workers,
    )
    ArtifactSink(config.output_dir).write(result)
    return result


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    load_env()
    try:
        config = load_config(
            database_url=args.database_url,
            schema=args.schema,
            output_dir=args.output_dir,
            context_name=args.context_name,
            connection_name=args.connection_name,
            type_rules_path=args.type_rules,
        )
        result = run(config, workers=max(1, args.workers), strict=args.strict)
    except (TranslatorError, SQLAlchemyError) as e:
        logger.error(f"Error translating schema: {e}")
        return 1
    except OSError as e:
        logger.error(f"Error writing artifacts: {e}")
        return 1

    report = result.report
    if report.unmapped_types:
        logger.warning(
            f"{len(report.unmapped_types)} column type(s) had no translation rule: "
            f"{', '.join(report.unmapped_type_names())}"
        )
    if report.rejected_rows:
        logger.warning(f"{len(report.rejected_rows)} catalog row(s) skipped")
        for error in report.rejected_rows:
            logger.warning(f"  {error.row.table or '?'}.{error.row.column or '?'}: {error.reason}")
    logger.info(f"Done: {len(result.schema)} tables")
    return 0


if __name__ == "__main__":
    sys.exit(main())
