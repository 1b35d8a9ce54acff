"""Observability – get_logger helper and per-run log context."""
from __future__ import annotations

import contextlib
import uuid
from typing import Any, Iterator

import structlog

from sheet_export.observability.logging.protocol import Logger


def get_logger(name: str | None = None, **initial_values: Any) -> Logger:
    """Return a structlog logger, optionally bound to *initial_values*.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def new_run_id() -> str:
    return uuid.uuid4().hex[:12]


@contextlib.contextmanager
def export_run_context(run_id: str, **values: Any) -> Iterator[str]:
    """Bind ``run_id`` (and *values*) to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(run_id=run_id, **values):
        yield run_id


__all__ = ["export_run_context", "get_logger", "new_run_id"]
