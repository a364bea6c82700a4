from __future__ import annotations

from dataclasses import dataclass, field

from parquetconv.core.errors import ValidationError
from parquetconv.core.sql import quote_identifier

STRUCT_TYPE_PREFIX = "STRUCT("


@dataclass(frozen=True, slots=True)
class ColumnDesc:
    name: str
    type: str

    @property
    def is_struct(self) -> bool:
        # "STRUCT(a INTEGER)[]" is a list of structs, not a struct.
        normalized = self.type.strip().upper()
        return normalized.startswith(STRUCT_TYPE_PREFIX) and normalized.endswith(")")


@dataclass(slots=True)
class TableDesc:
    columns: list[ColumnDesc] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def unnested_columns(self) -> str:
        """Render the engine-native unnest projection of every column, in order."""
        if not self.columns:
            raise ValidationError("Cannot unnest a table without columns.")
        parts: list[str] = []
        for column in self.columns:
            identifier = quote_identifier(column.name)
            if column.is_struct:
                parts.append(f"unnest({identifier}, recursive := true)")
            else:
                parts.append(identifier)
        return ", ".join(parts)
