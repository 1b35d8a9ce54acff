"""Application export – cell value coercion per EdmType."""
from __future__ import annotations

import datetime as dt
import json
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from sheet_export.application.export.property import EdmType

__all__ = ["NUMBER_FORMATS", "coerce_cell"]

NUMBER_FORMATS: dict[EdmType, str] = {
    EdmType.NUMBER: "General",
    EdmType.BIG_NUMBER: "0",
    EdmType.CURRENCY: "#,##0.00",
    EdmType.PERCENTAGE: "0.00%",
    EdmType.DATE: "yyyy-mm-dd",
    EdmType.DATE_TIME: "yyyy-mm-dd hh:mm:ss",
    EdmType.TIME: "hh:mm:ss",
}

_TRUE = {"true", "yes", "1", "y", "x"}
_FALSE = {"false", "no", "0", "n", ""}


def coerce_cell(value: Any, edm_type: EdmType) -> Any:
    """Convert *value* to what a cell of *edm_type* should hold.

    Values that cannot be converted are kept as text rather than dropped.
    """
    if value is None:
        return None
    try:
        if edm_type in (EdmType.NUMBER, EdmType.CURRENCY, EdmType.PERCENTAGE):
            return _number(value)
        if edm_type is EdmType.BIG_NUMBER:
            return value if isinstance(value, (int, Decimal)) else Decimal(str(value).strip())
        if edm_type is EdmType.BOOLEAN:
            return _boolean(value)
        if edm_type is EdmType.DATE:
            return _date(value)
        if edm_type is EdmType.DATE_TIME:
            return _naive(_datetime(value))
        if edm_type is EdmType.TIME:
            return _time(value)
    except (ValueError, TypeError, InvalidOperation):
        return _text(value)
    return _text(value)


def _number(value: Any) -> int | float | Decimal:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float, Decimal)):
        return value
    text = str(value).strip().replace(",", "")
    if text.endswith("%"):
        return float(text[:-1]) / 100
    try:
        return int(text)
    except ValueError:
        return float(text)


def _boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _date(value: Any) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value).strip()[:10])


def _datetime(value: Any) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time())
    return dt.datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))


def _naive(value: dt.datetime) -> dt.datetime:
    # Spreadsheet cells carry no timezone.
    if value.tzinfo is None:
        return value
    return value.astimezone(dt.timezone.utc).replace(tzinfo=None)


def _time(value: Any) -> dt.time:
    if isinstance(value, dt.datetime):
        return value.time()
    if isinstance(value, dt.time):
        return value
    return dt.time.fromisoformat(str(value).strip())


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return json.dumps(value, default=str, ensure_ascii=False)
    return str(value)
