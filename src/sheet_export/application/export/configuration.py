"""Application export – ExportConfiguration (declared export settings)."""
from __future__ import annotations

import dataclasses
import json
from typing import Any, ClassVar, Iterable, Mapping

from sheet_export.application.export.property import PropertyDefinition
from sheet_export.config.settings import Settings
from sheet_export.config.validation import InvalidSettingValueError
from sheet_export.kernel.errors import ValidationError

__all__ = ["ExportConfiguration"]


@dataclasses.dataclass
class ExportConfiguration(Settings):
    """Settings an integrator declares for one export control.

    ``properties`` keeps declaration order, which is the output column order
    whenever the defined properties are exported as-is.  The flags only
    affecting the selection dialog are ignored when ``show_selection_dialog``
    is ``False``; ``export_all_rows`` and ``export_all_columns`` are ignored
    when it is ``True``.

    ``properties`` may be passed as :class:`PropertyDefinition` instances,
    mappings (see :meth:`PropertyDefinition.from_dict`) or a JSON array
    string, as read from ``SHEET_EXPORT_PROPERTIES``.  Instances are read-only
    once constructed; use :func:`dataclasses.replace` to derive a new one.
    """

    _prefix: ClassVar[str] = "SHEET_EXPORT"
    _sealed: ClassVar[bool] = False

    properties: tuple[PropertyDefinition, ...] = ()
    file_name: str = "Export.xlsx"
    sheet_name: str = "Export Data"
    export_all_rows: bool = False
    export_all_columns: bool = False
    show_selection_dialog: bool = False
    show_only_defined_properties: bool = True
    show_defined_properties_first: bool = False
    select_defined_properties: bool = True
    highlight_defined_properties: bool = False
    show_property_names: bool = False
    sort_properties: bool = True

    def __post_init__(self) -> None:
        self.properties = _normalise_properties(self.properties)
        super().__post_init__()
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if self._sealed:
            raise dataclasses.FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise dataclasses.FrozenInstanceError(f"cannot delete field {name!r}")

    def _validate(self) -> None:
        seen: set[str] = set()
        for prop in self.properties:
            if prop.source_field in seen:
                raise InvalidSettingValueError(
                    "properties", prop.source_field, "source_field must be unique"
                )
            seen.add(prop.source_field)
        if not self.file_name.strip():
            raise InvalidSettingValueError("file_name", self.file_name, "must not be empty")
        if not self.sheet_name.strip():
            raise InvalidSettingValueError("sheet_name", self.sheet_name, "must not be empty")

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def has_defined_properties(self) -> bool:
        return bool(self.properties)

    @property
    def defined_fields(self) -> tuple[str, ...]:
        return tuple(p.source_field for p in self.properties)

    def find_property(self, source_field: str) -> PropertyDefinition | None:
        for prop in self.properties:
            if prop.source_field == source_field:
                return prop
        return None

    # ------------------------------------------------------------------
    # Declared form
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExportConfiguration":
        """Build from declared settings; unknown keys are rejected."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidSettingValueError(
                unknown[0], data[unknown[0]], "unknown export setting"
            )
        return cls(**dict(data))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if field.name == "properties":
                value = [p.to_dict() for p in value]
            result[field.name] = value
        return result


def _normalise_properties(raw: Any) -> tuple[PropertyDefinition, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        if not raw.strip():
            return ()
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidSettingValueError("properties", raw, f"invalid JSON: {exc.msg}") from exc
    if isinstance(raw, Mapping) or not isinstance(raw, Iterable):
        raise InvalidSettingValueError("properties", raw, "expected a sequence of properties")

    props: list[PropertyDefinition] = []
    for item in raw:
        if isinstance(item, PropertyDefinition):
            props.append(item)
        elif isinstance(item, Mapping):
            try:
                props.append(PropertyDefinition.from_dict(item))
            except ValidationError as exc:
                raise InvalidSettingValueError("properties", dict(item), exc.message) from exc
        else:
            raise InvalidSettingValueError("properties", item, "not a property definition")
    return tuple(props)
