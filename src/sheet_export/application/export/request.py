"""Application export – ColumnDef, ExportRequest and ExportResult."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Sequence

from sheet_export.application.export.property import EdmType, PropertyDefinition

__all__ = ["ColumnDef", "ExportFormat", "ExportRequest", "ExportResult", "read_field"]

ExportFormat = Literal["xlsx", "csv", "json"]


@dataclass(frozen=True)
class ColumnDef:
    """Defines a single column in an export."""

    key: str                          # field path read from each row
    header: str                       # column header text
    type: EdmType = EdmType.STRING    # target cell type
    wrap: bool = False                # wrap text in the generated cell

    @classmethod
    def from_property(cls, prop: PropertyDefinition) -> "ColumnDef":
        return cls(key=prop.source_field, header=prop.label, type=prop.data_type, wrap=prop.wrap)


@dataclass
class ExportRequest:
    """Describes a data export to be performed."""

    columns: list[ColumnDef]
    rows: Sequence[Mapping[str, Any]]
    sheet_name: str = "Export Data"
    file_name: str = "Export.xlsx"
    format: ExportFormat = "xlsx"

    def values(self, row: Mapping[str, Any]) -> list[Any]:
        return [read_field(row, col.key) for col in self.columns]


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a successful build."""

    file_name: str
    content_type: str
    size_bytes: int
    location: str
    row_count: int = 0
    column_count: int = 0
    detail: dict[str, Any] = field(default_factory=dict)


def read_field(row: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Read *path* from *row*; a flat key wins over a dotted walk."""
    if path in row:
        return row[path]
    current: Any = row
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current
