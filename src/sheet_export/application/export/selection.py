"""Application export – state of the property selection dialog.

One :class:`SelectionModel` belongs to one planner.  It is created lazily on
the first dialog use and reloaded with fresh candidates on every trigger, so
two export controls on the same page never share selection state.
"""
from __future__ import annotations

from dataclasses import dataclass

from sheet_export.application.export.candidates import CandidateColumn
from sheet_export.application.export.configuration import ExportConfiguration

__all__ = ["SelectionItem", "SelectionModel"]

HIGHLIGHT_DEFINED = ("Success", "Default property")
HIGHLIGHT_DISCOVERED = ("Information", "Discovered property")


@dataclass
class SelectionItem:
    column: CandidateColumn
    description: str = ""
    selected: bool = False
    highlight: str = "None"
    highlight_text: str = ""

    @property
    def title(self) -> str:
        return self.column.title

    @property
    def is_defined(self) -> bool:
        return self.column.is_defined


class SelectionModel:
    """Checkbox/list/button state rendered by a :class:`SelectionUI`."""

    def __init__(self, config: ExportConfiguration) -> None:
        self._config = config
        self.items: list[SelectionItem] = []
        self.select_all_checked = False
        self.select_defined_checked = False
        self.all_rows_count = 0
        self.visible_rows_count = 0
        self.is_open = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(
        self,
        candidates: list[CandidateColumn],
        *,
        all_rows_count: int,
        visible_rows_count: int,
    ) -> None:
        """Replace the items with *candidates* and apply the initial selection."""
        config = self._config
        preselect = config.has_defined_properties and config.select_defined_properties
        self.items = []
        for column in candidates:
            defined = self._is_declared(column.source_field)
            item = SelectionItem(
                column=column,
                description=column.source_field if config.show_property_names else "",
                selected=preselect and defined,
            )
            if config.highlight_defined_properties:
                item.highlight, item.highlight_text = (
                    HIGHLIGHT_DEFINED if defined else HIGHLIGHT_DISCOVERED
                )
            self.items.append(item)
        self.select_all_checked = False
        self.select_defined_checked = preselect
        self.all_rows_count = all_rows_count
        self.visible_rows_count = visible_rows_count

    def reset(self) -> None:
        """Restore checkbox state after the dialog closes."""
        self.select_all_checked = False
        self.select_defined_checked = self._config.has_defined_properties
        self.is_open = False

    # ------------------------------------------------------------------
    # Toolbar
    # ------------------------------------------------------------------

    @property
    def show_select_all(self) -> bool:
        return not (self._config.has_defined_properties and self._config.show_only_defined_properties)

    @property
    def show_select_defined(self) -> bool:
        return self._config.has_defined_properties

    @property
    def select_all_label(self) -> str:
        return f"Select All ({len(self.items)})"

    @property
    def select_defined_label(self) -> str:
        if not self.show_select_all:
            return f"Select All ({len(self.items)})"
        return f"Select Defaults ({len(self._config.properties)})"

    @property
    def select_all_state(self) -> str:
        return "Information" if self._config.highlight_defined_properties else "None"

    @property
    def select_defined_state(self) -> str:
        return "Success" if self._config.highlight_defined_properties else "None"

    def toggle_all(self, checked: bool) -> None:
        """Handle the "Select All" checkbox.

        Unchecking it while "Select Defaults" stays checked only drops the
        discovered properties.
        """
        self.select_all_checked = checked
        if checked:
            for item in self.items:
                item.selected = True
        elif not self.select_defined_checked:
            for item in self.items:
                item.selected = False
        else:
            for item in self.items:
                if item.selected and not self._is_declared(self.field_of(item)):
                    item.selected = False

    def toggle_defined(self, checked: bool) -> None:
        """Handle the "Select Defaults" checkbox."""
        self.select_defined_checked = checked
        for item in self.items:
            if self._is_declared(self.field_of(item)):
                item.selected = checked

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    def set_selected(self, source_field: str, selected: bool = True) -> None:
        for item in self.items:
            if item.column.source_field == source_field:
                item.selected = selected
                return
        raise KeyError(source_field)

    def field_of(self, item: SelectionItem) -> str:
        """Map a rendered item back to its source field."""
        if self._config.show_property_names:
            return item.description
        return item.column.source_field

    @property
    def selected_items(self) -> list[SelectionItem]:
        return [item for item in self.items if item.selected]

    def selected_columns(self) -> list[CandidateColumn]:
        """Selected candidates in display order, keyed by the mapped field."""
        columns: list[CandidateColumn] = []
        for item in self.selected_items:
            field = self.field_of(item)
            column = item.column
            if field != column.source_field:
                column = CandidateColumn(
                    title=column.title,
                    source_field=field,
                    data_type=column.data_type,
                    is_defined=column.is_defined,
                    wrap=column.wrap,
                )
            columns.append(column)
        return columns

    @property
    def no_data_text(self) -> str:
        return "No Properties Found"

    # ------------------------------------------------------------------
    # Buttons
    # ------------------------------------------------------------------

    @property
    def export_all_label(self) -> str:
        return f"Export All Rows ({self.all_rows_count})"

    @property
    def export_visible_label(self) -> str:
        return f"Export Visible Rows ({self.visible_rows_count})"

    @property
    def offer_visible_rows(self) -> bool:
        """Hide the visible-rows choice when it would export the same rows."""
        return self.all_rows_count != self.visible_rows_count

    def _is_declared(self, source_field: str) -> bool:
        return self._config.find_property(source_field) is not None
