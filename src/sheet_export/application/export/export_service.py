"""Application export – ExportService dispatches to the correct exporter."""
from __future__ import annotations

import json
import time
from pathlib import PurePath
from typing import Any, Protocol

from sheet_export.application.export.cells import coerce_cell
from sheet_export.application.export.csv_export import CsvExporter
from sheet_export.application.export.excel_export import ExcelExporter
from sheet_export.application.export.request import ExportRequest, ExportResult
from sheet_export.application.export.store import ObjectStore
from sheet_export.kernel.errors import ExportBuildError
from sheet_export.observability.logging import get_logger

__all__ = ["CONTENT_TYPES", "ExportService", "Exporter"]

logger = get_logger(__name__)

CONTENT_TYPES: dict[str, str] = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv",
    "json": "application/json",
}


class Exporter(Protocol):
    async def export(self, request: ExportRequest) -> bytes: ...


class ExportService:
    """Default spreadsheet builder: encode a request, store the file.

    Any failure while encoding or storing surfaces as
    :class:`~sheet_export.kernel.errors.ExportBuildError`.
    """

    def __init__(self, store: ObjectStore, *, bom: bool = False) -> None:
        self._store = store
        self._exporters: dict[str, Exporter] = {
            "xlsx": ExcelExporter(),
            "csv": CsvExporter(bom=bom),
        }

    async def build(self, request: ExportRequest) -> ExportResult:
        file_name = self.file_name_for(request)
        start = time.monotonic()
        try:
            data = await self.encode(request)
            location = await self._store.put(file_name, data, CONTENT_TYPES[request.format])
        except ExportBuildError:
            raise
        except Exception as exc:
            raise ExportBuildError(
                f"Export failed: {exc}", file_name=file_name, cause=exc
            ) from exc

        duration_ms = (time.monotonic() - start) * 1000
        logger.debug(
            "export_service.built",
            format=request.format,
            file_name=file_name,
            size_bytes=len(data),
            duration_ms=round(duration_ms, 2),
        )
        return ExportResult(
            file_name=file_name,
            content_type=CONTENT_TYPES[request.format],
            size_bytes=len(data),
            location=location,
            row_count=len(request.rows),
            column_count=len(request.columns),
        )

    async def encode(self, request: ExportRequest) -> bytes:
        if request.format == "json":
            return await self._export_json(request)
        exporter = self._exporters.get(request.format)
        if exporter is None:
            raise ExportBuildError(
                f"Unsupported export format: {request.format!r}",
                file_name=request.file_name,
            )
        return await exporter.export(request)

    @staticmethod
    def file_name_for(request: ExportRequest) -> str:
        """Make the file extension agree with the export format."""
        path = PurePath(request.file_name)
        if path.suffix.lower() == f".{request.format}":
            return path.name
        return f"{path.stem or 'Export'}.{request.format}"

    @staticmethod
    async def _export_json(request: ExportRequest) -> bytes:
        rows: list[dict[str, Any]] = []
        for row in request.rows:
            rows.append(
                {
                    col.header: coerce_cell(value, col.type)
                    for col, value in zip(request.columns, request.values(row))
                }
            )
        return json.dumps(rows, default=str, ensure_ascii=False).encode("utf-8")
