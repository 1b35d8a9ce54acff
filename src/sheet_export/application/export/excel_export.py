"""Application export – ExcelExporter (openpyxl)."""
from __future__ import annotations

import io
import re
from typing import Any

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from sheet_export.application.export.cells import NUMBER_FORMATS, coerce_cell
from sheet_export.application.export.request import ExportRequest

__all__ = ["ExcelExporter", "sheet_title"]

_MAX_WIDTH = 50
_WRAPPED_WIDTH = 40
_INVALID_TITLE_CHARS = re.compile(r"[\[\]:*?/\\]")


def sheet_title(name: str) -> str:
    """Worksheet titles are limited to 31 chars and a restricted charset."""
    title = _INVALID_TITLE_CHARS.sub(" ", name).strip()[:31]
    return title or "Sheet1"


def _put(ws: Any, row: int, column: int, value: Any) -> Any:
    """Write *value*; text is stored as a literal string, never a formula."""
    if not isinstance(value, str):
        return ws.cell(row=row, column=column, value=value)
    cell = ws.cell(row=row, column=column, value=ILLEGAL_CHARACTERS_RE.sub("", value))
    cell.data_type = "s"
    return cell


class ExcelExporter:
    """Exports data to an .xlsx workbook using ``openpyxl``."""

    def __init__(self, *, freeze_header: bool = True) -> None:
        self._freeze_header = freeze_header

    async def export(self, request: ExportRequest) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_title(request.sheet_name)

        header_font = Font(bold=True)
        for col_idx, col_def in enumerate(request.columns, start=1):
            cell = _put(ws, 1, col_idx, col_def.header)
            cell.font = header_font

        wrap = Alignment(wrap_text=True, vertical="top")
        widths = [len(col.header) for col in request.columns]
        for row_idx, row in enumerate(request.rows, start=2):
            for col_idx, (col_def, raw) in enumerate(zip(request.columns, request.values(row)), start=1):
                cell = _put(ws, row_idx, col_idx, coerce_cell(raw, col_def.type))
                number_format = NUMBER_FORMATS.get(col_def.type)
                if number_format is not None and cell.value is not None and not isinstance(cell.value, str):
                    cell.number_format = number_format
                if col_def.wrap:
                    cell.alignment = wrap
                widths[col_idx - 1] = max(widths[col_idx - 1], len(str(cell.value or "")))

        for col_idx, col_def in enumerate(request.columns, start=1):
            cap = _WRAPPED_WIDTH if col_def.wrap else _MAX_WIDTH
            ws.column_dimensions[get_column_letter(col_idx)].width = min(widths[col_idx - 1] + 2, cap)

        if self._freeze_header and request.columns:
            ws.freeze_panes = "A2"

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
