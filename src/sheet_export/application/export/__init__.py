"""Application export – column/row planning and spreadsheet export."""
from sheet_export.application.export.button import ExportButton
from sheet_export.application.export.candidates import CandidateColumn, build_candidate_list
from sheet_export.application.export.configuration import ExportConfiguration
from sheet_export.application.export.csv_export import CsvExporter
from sheet_export.application.export.excel_export import ExcelExporter
from sheet_export.application.export.export_service import ExportService
from sheet_export.application.export.naming import friendly_name
from sheet_export.application.export.planner import ExportPlanner, ExportRun
from sheet_export.application.export.ports import (
    Cancel,
    Confirm,
    DataSource,
    NotificationLevel,
    Notifier,
    RowScope,
    SelectionUI,
    SpreadsheetBuilder,
)
from sheet_export.application.export.property import EdmType, PropertyDefinition
from sheet_export.application.export.request import ColumnDef, ExportRequest, ExportResult
from sheet_export.application.export.selection import SelectionItem, SelectionModel
from sheet_export.application.export.store import FileSystemObjectStore, ObjectStore

__all__ = [
    "CandidateColumn",
    "Cancel",
    "ColumnDef",
    "Confirm",
    "CsvExporter",
    "DataSource",
    "EdmType",
    "ExcelExporter",
    "ExportButton",
    "ExportConfiguration",
    "ExportPlanner",
    "ExportRequest",
    "ExportResult",
    "ExportRun",
    "ExportService",
    "FileSystemObjectStore",
    "NotificationLevel",
    "Notifier",
    "ObjectStore",
    "PropertyDefinition",
    "RowScope",
    "SelectionItem",
    "SelectionModel",
    "SelectionUI",
    "SpreadsheetBuilder",
    "build_candidate_list",
    "friendly_name",
]
