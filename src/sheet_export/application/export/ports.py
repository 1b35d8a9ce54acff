"""Application export – collaborator ports.

The planner only talks to the outside world through these protocols; the
host supplies concrete adapters and the test-suite supplies the fakes in
:mod:`sheet_export.testing.fakes`.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping, Protocol, Sequence, Union, runtime_checkable

from sheet_export.application.export.request import ExportRequest, ExportResult

if TYPE_CHECKING:
    from sheet_export.application.export.selection import SelectionModel

__all__ = [
    "Cancel",
    "Confirm",
    "DataSource",
    "NotificationLevel",
    "Notifier",
    "Record",
    "RowScope",
    "SelectionEvent",
    "SelectionUI",
    "SpreadsheetBuilder",
    "Unsubscribe",
]

Record = Mapping[str, Any]
Unsubscribe = Callable[[], None]


class RowScope(str, enum.Enum):
    """Which records an export covers."""

    ALL_ROWS = "all_rows"
    VISIBLE_ROWS = "visible_rows"


class NotificationLevel(str, enum.Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@runtime_checkable
class DataSource(Protocol):
    """Port: the collection bound to the list/table being exported."""

    def get_all_records(self) -> Sequence[Record]:
        """Every record in the backing collection, rendered or not."""
        ...

    def get_visible_records(self) -> Sequence[Record]:
        """Only the records currently bound to rendered items."""
        ...

    def on_content_changed(self, callback: Callable[[], None]) -> Unsubscribe:
        """Call *callback* whenever the rendered content changes."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """Port: short user-facing messages (toasts, status bar, CLI output)."""

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None: ...


@runtime_checkable
class SpreadsheetBuilder(Protocol):
    """Port: encode an :class:`ExportRequest` and deliver the file."""

    async def build(self, request: ExportRequest) -> ExportResult: ...


@dataclass(frozen=True)
class Confirm:
    """The user pressed one of the export buttons."""

    scope: RowScope


@dataclass(frozen=True)
class Cancel:
    """The user closed the dialog."""


SelectionEvent = Union[Confirm, Cancel]


@runtime_checkable
class SelectionUI(Protocol):
    """Port: modal multi-select list rendering a :class:`SelectionModel`.

    The UI toggles item selection on the model it was opened with and reports
    button presses through :meth:`next_event`.
    """

    def open(self, model: "SelectionModel") -> None: ...

    def close(self) -> None: ...

    async def next_event(self) -> SelectionEvent: ...
