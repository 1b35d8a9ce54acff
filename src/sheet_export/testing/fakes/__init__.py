"""Testing fakes – in-memory collaborators for the export planner."""
from sheet_export.testing.fakes.builder import RecordingSpreadsheetBuilder
from sheet_export.testing.fakes.data_source import InMemoryDataSource
from sheet_export.testing.fakes.notifier import InMemoryNotifier
from sheet_export.testing.fakes.object_store import InMemoryObjectStore
from sheet_export.testing.fakes.selection_ui import ScriptedSelectionUI

__all__ = [
    "InMemoryDataSource",
    "InMemoryNotifier",
    "InMemoryObjectStore",
    "RecordingSpreadsheetBuilder",
    "ScriptedSelectionUI",
]
