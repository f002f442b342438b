"""
Emitter base class and the member-naming plan shared by the C# emitters.

Every table-level emitter reads an immutable Schema and returns its own
artifact; emitters hold no state that changes during emit().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..models import Column, Schema, Table
from ..naming import pluralize, title_case, unique_member
from ..type_mapper import DEFAULT_MAPPER, TypeMapper


class ArtifactEmitter(ABC):
    """Abstract base for artifact emitters."""

    name: str = ""

    def __init__(self, type_mapper: Optional[TypeMapper] = None):
        self.type_mapper = type_mapper or DEFAULT_MAPPER

    @abstractmethod
    def emit(self, schema: Schema) -> Any:
        """Render the artifact(s) for the whole schema."""
        pass


@dataclass(frozen=True)
class MemberPlan:
    """C# member names for one table, so entity and mapping output agree."""

    class_name: str
    properties: Tuple[Tuple[Column, str], ...]
    references: Tuple[Tuple[str, str], ...]
    collections: Tuple[Tuple[str, str], ...]

    def property_name(self, column_name: str) -> str:
        for column, member in self.properties:
            if column.name == column_name:
                return member
        raise KeyError(column_name)

    def reference_name(self, target: str) -> str:
        return dict(self.references)[target]

    def collection_name(self, source: str) -> Optional[str]:
        return dict(self.collections).get(source)


def plan_members(table: Table) -> MemberPlan:
    """Assign collision-free member names: columns, then references, then collections."""
    class_name = title_case(table.name)
    taken = {class_name}

    properties = []
    for column in table.columns:
        member = unique_member(title_case(column.name), taken)
        taken.add(member)
        properties.append((column, member))

    references = []
    for target in table.foreign_key_targets:
        base = title_case(target)
        if target == table.name:
            base = f"Parent{base}"
        member = unique_member(base, taken)
        taken.add(member)
        references.append((target, member))

    collections = []
    for source in table.incoming_references:
        base = pluralize(title_case(source))
        if source == table.name:
            base = f"Child{base}"
        member = unique_member(base, taken)
        taken.add(member)
        collections.append((source, member))

    return MemberPlan(class_name, tuple(properties), tuple(references), tuple(collections))


def plan_schema(schema: Schema) -> Dict[str, MemberPlan]:
    return {table.name: plan_members(table) for table in schema.tables}
