"""C# entity class emitter."""

from typing import Dict, List

from ..models import Schema, Table
from ..naming import title_case
from .base import ArtifactEmitter, MemberPlan, plan_members

_USINGS = (
    "using System;",
    "using System.Collections.Generic;",
    "using System.ComponentModel.DataAnnotations;",
    "using System.ComponentModel.DataAnnotations.Schema;",
)


class EntityEmitter(ArtifactEmitter):
    """Emit one partial class per table with scalar and navigation properties."""

    name = "entity"

    def render(self, table: Table, plan: MemberPlan) -> str:
        lines: List[str] = [*_USINGS, "", f"public partial class {plan.class_name}", "{"]
        composite = len(table.primary_key_columns) > 1
        key_order = {c.name: i for i, c in enumerate(table.primary_key_columns)}

        for column, member in plan.properties:
            if column.is_primary_key:
                if composite:
                    lines.append(f"    [Key, Column(Order = {key_order[column.name]})]")
                else:
                    lines.append("    [Key]")
            prop_type = self.type_mapper.property_type_for(column).name
            lines.append(f"    public {prop_type} {member} {{ get; set; }}")

        if plan.references:
            lines.append("")
        for target, member in plan.references:
            lines.append(f"    public virtual {title_case(target)} {member} {{ get; set; }}")

        if plan.collections:
            lines.append("")
        for source, member in plan.collections:
            element = title_case(source)
            lines.append(
                f"    public virtual ICollection<{element}> {member} {{ get; set; }} = new HashSet<{element}>();"
            )

        lines.append("}")
        return "\n".join(lines) + "\n"

    def emit(self, schema: Schema) -> Dict[str, str]:
        return {table.name: self.render(table, plan_members(table)) for table in schema.tables}
