"""Application export – EdmType and PropertyDefinition."""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Mapping

from sheet_export.application.export.naming import friendly_name
from sheet_export.kernel.errors import ValidationError

__all__ = ["EdmType", "PropertyDefinition"]


class EdmType(str, enum.Enum):
    """Spreadsheet cell type of an exported column."""

    STRING = "String"
    NUMBER = "Number"
    BIG_NUMBER = "BigNumber"
    CURRENCY = "Currency"
    PERCENTAGE = "Percentage"
    BOOLEAN = "Boolean"
    DATE = "Date"
    DATE_TIME = "DateTime"
    TIME = "Time"
    TIMEZONE = "Timezone"
    ENUMERATION = "Enumeration"

    @classmethod
    def parse(cls, value: "EdmType | str | None") -> "EdmType":
        """Accept an ``EdmType``, its value or its name, case-insensitively."""
        if value is None or value == "":
            return cls.STRING
        if isinstance(value, cls):
            return value
        wanted = str(value).strip().lower().replace("_", "")
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower().replace("_", "")):
                return member
        raise ValidationError(
            f"Unknown cell type {value!r}",
            errors=[{"field": "data_type", "value": value}],
        )


@dataclasses.dataclass(frozen=True)
class PropertyDefinition:
    """One column an integrator declared as exportable."""

    label: str
    source_field: str
    data_type: EdmType = EdmType.STRING
    wrap: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.source_field, str) or not self.source_field.strip():
            raise ValidationError(
                "PropertyDefinition.source_field must not be empty",
                errors=[{"field": "source_field", "value": self.source_field}],
            )
        if not isinstance(self.data_type, EdmType):
            object.__setattr__(self, "data_type", EdmType.parse(self.data_type))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PropertyDefinition":
        """Build from a declared mapping.

        ``value`` is accepted as an alias of ``source_field`` and ``type`` of
        ``data_type``; a missing label falls back to the friendly name of the
        field.
        """
        field = data.get("source_field", data.get("value", ""))
        label = data.get("label") or friendly_name(str(field or ""))
        return cls(
            label=label,
            source_field=field,
            data_type=EdmType.parse(data.get("data_type", data.get("type"))),
            wrap=bool(data.get("wrap", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "source_field": self.source_field,
            "data_type": self.data_type.value,
            "wrap": self.wrap,
        }
