"""Application export – CsvExporter."""
from __future__ import annotations

import csv
import datetime as dt
import io
from typing import Any

from sheet_export.application.export.cells import coerce_cell
from sheet_export.application.export.request import ExportRequest

__all__ = ["CsvExporter"]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dt.date, dt.time)):
        return value.isoformat()
    return str(value)


class CsvExporter:
    """Writes rows into a CSV file (in-memory)."""

    def __init__(
        self,
        delimiter: str = ",",
        quoting: int = csv.QUOTE_MINIMAL,
        *,
        bom: bool = False,
    ) -> None:
        self._delimiter = delimiter
        self._quoting = quoting
        self._bom = bom

    async def export(self, request: ExportRequest) -> bytes:
        """Return the complete CSV content as bytes (UTF-8, optional BOM)."""
        buf = io.StringIO()
        if self._bom:
            buf.write("\ufeff")  # BOM for Excel compatibility

        writer = csv.writer(buf, delimiter=self._delimiter, quoting=self._quoting)
        writer.writerow([col.header for col in request.columns])

        for row in request.rows:
            writer.writerow(
                [
                    _text(coerce_cell(value, col.type))
                    for col, value in zip(request.columns, request.values(row))
                ]
            )

        return buf.getvalue().encode("utf-8")
