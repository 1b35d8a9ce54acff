"""Observability – LoggerFactory (structlog over the stdlib logging tree)."""
from __future__ import annotations

import logging
from typing import Any

import structlog


class LoggerFactory:
    """Configure structlog once for the host application.

    Library code never calls this; it only asks for loggers via
    :func:`~sheet_export.observability.logging.get_logger`.
    """

    @staticmethod
    def configure(level: int = logging.INFO, *, json: bool = True) -> None:
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        renderer: Any = (
            structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


def configure_logging(level: int = logging.INFO, *, json: bool = True) -> None:
    """Shortcut for :meth:`LoggerFactory.configure`."""
    LoggerFactory.configure(level, json=json)


__all__ = ["LoggerFactory", "configure_logging"]
