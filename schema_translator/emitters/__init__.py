"""Artifact emitters: PostgreSQL DDL, C# entities, EF6 mappings and DbContext."""

from typing import Optional

from .base import ArtifactEmitter, MemberPlan, plan_members, plan_schema
from .ddl import DdlEmitter
from .entity import EntityEmitter
from .mapping import ContextAggregator, MappingEmitter, mapping_class_name

_EMITTERS = {
    DdlEmitter.name: DdlEmitter,
    EntityEmitter.name: EntityEmitter,
    MappingEmitter.name: MappingEmitter,
}


def get_emitter(name: str, **kwargs) -> Optional[ArtifactEmitter]:
    """Get the table-level emitter registered under `name` (ddl, entity, mapping).

    Returns:
        Emitter instance or None if the name is not registered.
    """
    emitter_cls = _EMITTERS.get(name)
    if emitter_cls is None:
        return None
    return emitter_cls(**kwargs)


def supported_emitters() -> tuple:
    """Return tuple of registered emitter names."""
    return tuple(_EMITTERS.keys())


__all__ = [
    "ArtifactEmitter",
    "ContextAggregator",
    "DdlEmitter",
    "EntityEmitter",
    "MappingEmitter",
    "MemberPlan",
    "get_emitter",
    "mapping_class_name",
    "plan_members",
    "plan_schema",
    "supported_emitters",
]
