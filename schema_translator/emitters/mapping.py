"""Entity Framework 6 mapping classes and the DbContext that registers them."""

from typing import Dict, Iterable, List, Optional

from ..models import Schema, Table
from ..naming import title_case
from .base import ArtifactEmitter, MemberPlan, plan_schema

DEFAULT_CONTEXT_NAME = "ApplicationDbContext"
DEFAULT_CONNECTION_NAME = "PostgresConnection"


def mapping_class_name(table_name: str) -> str:
    return f"{title_case(table_name)}Mapping"


class MappingEmitter(ArtifactEmitter):
    """Emit one EntityTypeConfiguration<T> per table."""

    name = "mapping"

    def _key_line(self, table: Table, plan: MemberPlan) -> Optional[str]:
        keys = [plan.property_name(c.name) for c in table.primary_key_columns]
        if not keys:
            return None
        if len(keys) == 1:
            return f"        HasKey(e => e.{keys[0]});"
        return f"        HasKey(e => new {{ {', '.join('e.' + k for k in keys)} }});"

    def render(self, table: Table, plan: MemberPlan, plans: Dict[str, MemberPlan]) -> str:
        lines: List[str] = [
            "using System.Data.Entity.ModelConfiguration;",
            "",
            f"public class {plan.class_name}Mapping : EntityTypeConfiguration<{plan.class_name}>",
            "{",
            f"    public {plan.class_name}Mapping()",
            "    {",
            f'        ToTable("{table.name.lower()}");',
        ]
        key_line = self._key_line(table, plan)
        if key_line:
            lines.append(key_line)

        lines.append("")
        for column, member in plan.properties:
            requirement = "IsOptional()" if column.nullable else "IsRequired()"
            line = f'        Property(e => e.{member}).{requirement}.HasColumnName("{column.name.lower()}")'
            if column.length > 0 and self.type_mapper.is_character_type(column.source_type):
                line += f".HasMaxLength({column.length})"
            lines.append(line + ";")

        for column, member in plan.properties:
            for target in column.foreign_key_targets:
                navigation = plan.reference_name(target)
                target_plan = plans.get(target)
                inverse = target_plan.collection_name(table.name) if target_plan else None
                with_many = f".WithMany(t => t.{inverse})" if inverse else ".WithMany()"
                has = "HasOptional" if column.nullable else "HasRequired"
                lines.append("")
                lines.append(f"        {has}(e => e.{navigation})")
                lines.append(f"            {with_many}")
                lines.append(f"            .HasForeignKey(e => e.{member});")

        lines.append("    }")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def emit(self, schema: Schema) -> Dict[str, str]:
        plans = plan_schema(schema)
        return {table.name: self.render(table, plans[table.name], plans) for table in schema.tables}


class ContextAggregator:
    """Emit the DbContext that registers every mapping class, in schema order."""

    def __init__(self, context_name: str = DEFAULT_CONTEXT_NAME, connection_name: str = DEFAULT_CONNECTION_NAME):
        self.context_name = context_name
        self.connection_name = connection_name

    def aggregate(self, table_names: Iterable[str]) -> str:
        lines = [
            "using System.Data.Entity;",
            "",
            f"public class {self.context_name} : DbContext",
            "{",
            f'    public {self.context_name}() : base("name={self.connection_name}")',
            "    {",
            "    }",
            "",
            "    protected override void OnModelCreating(DbModelBuilder modelBuilder)",
            "    {",
        ]
        for name in table_names:
            lines.append(f"        modelBuilder.Configurations.Add(new {mapping_class_name(name)}());")
        lines.append("        base.OnModelCreating(modelBuilder);")
        lines.append("    }")
        lines.append("}")
        return "\n".join(lines) + "\n"
