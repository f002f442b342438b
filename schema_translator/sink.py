"""Write translation artifacts into timestamped output folders."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .emitters import mapping_class_name
from .naming import title_case
from .pipeline import TranslationResult

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d-%H%M%S"


@dataclass
class WrittenArtifacts:
    script: Optional[Path] = None
    entities: List[Path] = field(default_factory=list)
    mappings: List[Path] = field(default_factory=list)
    context: Optional[Path] = None

    def all_paths(self) -> List[Path]:
        paths = [self.script, *self.entities, *self.mappings, self.context]
        return [p for p in paths if p is not None]


class ArtifactSink:
    """
    Layout under base_dir (one timestamp per write() call):

        Script/<ts>.sql
        ClassDefinition/<ts>/<Class>.cs
        MappingClasses/<ts>/<Class>Mapping.cs
        ApplicationDbContext/<ts>/<ContextName>.cs
    """

    def __init__(self, base_dir: Union[str, Path], clock: Optional[Callable[[], datetime]] = None):
        self.base_dir = Path(base_dir)
        self._clock = clock or datetime.now

    @staticmethod
    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def write_script(self, ddl: str, stamp: str) -> Path:
        return self._write(self.base_dir / "Script" / f"{stamp}.sql", ddl)

    def write_entities(self, entities: Dict[str, str], stamp: str) -> List[Path]:
        folder = self.base_dir / "ClassDefinition" / stamp
        return [self._write(folder / f"{title_case(name)}.cs", text) for name, text in entities.items()]

    def write_mappings(self, mappings: Dict[str, str], stamp: str) -> List[Path]:
        folder = self.base_dir / "MappingClasses" / stamp
        return [self._write(folder / f"{mapping_class_name(name)}.cs", text) for name, text in mappings.items()]

    def write_context(self, context: str, context_name: str, stamp: str) -> Path:
        return self._write(self.base_dir / "ApplicationDbContext" / stamp / f"{context_name}.cs", context)

    def write(self, result: TranslationResult) -> WrittenArtifacts:
        stamp = self._clock().strftime(TIMESTAMP_FORMAT)
        logger.info(f"Saving artifacts to {self.base_dir} ({stamp})")
        written = WrittenArtifacts(
            script=self.write_script(result.ddl, stamp),
            entities=self.write_entities(result.entities, stamp),
            mappings=self.write_mappings(result.mappings, stamp),
            context=self.write_context(result.context, result.context_name, stamp),
        )
        logger.info(f"Wrote {len(written.all_paths())} files")
        return written
