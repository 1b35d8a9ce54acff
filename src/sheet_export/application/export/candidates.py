"""Application export – candidate columns offered for selection."""
from __future__ import annotations

from collections.abc import Mapping, Set
from dataclasses import dataclass
from typing import Any, Iterable

from sheet_export.application.export.configuration import ExportConfiguration
from sheet_export.application.export.naming import friendly_name
from sheet_export.application.export.property import EdmType, PropertyDefinition

__all__ = [
    "CandidateColumn",
    "build_candidate_list",
    "order_candidates",
    "scalar_fields",
    "template_candidates",
]


@dataclass(frozen=True)
class CandidateColumn:
    """A column eligible for selection, either declared or discovered."""

    title: str
    source_field: str
    data_type: EdmType = EdmType.STRING
    is_defined: bool = False
    wrap: bool = False

    @classmethod
    def defined(cls, prop: PropertyDefinition) -> "CandidateColumn":
        return cls(
            title=prop.label,
            source_field=prop.source_field,
            data_type=prop.data_type,
            is_defined=True,
            wrap=prop.wrap,
        )

    @classmethod
    def discovered(cls, source_field: str) -> "CandidateColumn":
        return cls(title=friendly_name(source_field), source_field=source_field)


def _is_scalar(value: Any) -> bool:
    # Only array-like values are dropped; nested records are exported as text.
    if isinstance(value, (str, bytes)):
        return True
    return not isinstance(value, (list, tuple, Set))


def scalar_fields(template: Mapping[str, Any]) -> list[str]:
    """Keys of *template* holding non-array values, in record order."""
    return [key for key, value in template.items() if _is_scalar(value)]


def template_candidates(
    config: ExportConfiguration, template: Mapping[str, Any]
) -> list[CandidateColumn]:
    """One candidate per scalar field of *template*, declared labels preferred."""
    candidates: list[CandidateColumn] = []
    for key in scalar_fields(template):
        prop = config.find_property(key)
        if prop is not None:
            candidates.append(CandidateColumn.defined(prop))
        else:
            candidates.append(CandidateColumn.discovered(key))
    return candidates


def order_candidates(
    candidates: Iterable[CandidateColumn],
    *,
    sort: bool,
    defined_first: bool,
) -> list[CandidateColumn]:
    """Apply the optional title sort, then the optional defined-first partition.

    Both passes are stable, so the partition keeps each group's sorted order.
    """
    ordered = list(candidates)
    if sort:
        ordered.sort(key=lambda c: c.title)
    if defined_first:
        ordered.sort(key=lambda c: not c.is_defined)
    return ordered


def build_candidate_list(
    config: ExportConfiguration, template: Mapping[str, Any] | None
) -> list[CandidateColumn]:
    """Columns to offer in the selection dialog.

    With declared properties and ``show_only_defined_properties`` the list is
    exactly those properties; otherwise it is every scalar field of the
    *template* record.  The defined-first pass is skipped in the former case
    since every entry is defined.
    """
    only_defined = config.has_defined_properties and config.show_only_defined_properties
    if only_defined:
        candidates = [CandidateColumn.defined(p) for p in config.properties]
    else:
        candidates = template_candidates(config, template or {})
    return order_candidates(
        candidates,
        sort=config.sort_properties,
        defined_first=(
            config.show_defined_properties_first and not config.show_only_defined_properties
        ),
    )
