"""Observability – structured logging ports and helpers."""
from sheet_export.observability.logging.factory import LoggerFactory, configure_logging
from sheet_export.observability.logging.processors import (
    export_run_context,
    get_logger,
    new_run_id,
)
from sheet_export.observability.logging.protocol import Logger

__all__ = [
    "Logger",
    "LoggerFactory",
    "configure_logging",
    "export_run_context",
    "get_logger",
    "new_run_id",
]
