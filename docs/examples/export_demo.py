"""Export demo: drive an ExportButton end to end and write a workbook.

Run with::

    pip install -e .
    python docs/examples/export_demo.py ./out

Reads its settings from ``SHEET_EXPORT_*`` environment variables (or a
``.env`` file), for example::

    SHEET_EXPORT_EXPORT_ALL_ROWS=true
    SHEET_EXPORT_PROPERTIES='[{"label": "Order", "value": "orderId", "type": "Number"}]'
"""
from __future__ import annotations

import asyncio
import sys

from sheet_export.application.export import (
    ExportButton,
    ExportConfiguration,
    ExportService,
    FileSystemObjectStore,
    NotificationLevel,
)
from sheet_export.config.settings import DotenvSettingsLoader, SettingsFactory
from sheet_export.observability.logging import configure_logging
from sheet_export.testing.fakes import InMemoryDataSource

ORDERS = [
    {
        "orderId": 1000 + i,
        "customerName": f"Customer {i}",
        "orderDate": f"2024-03-{i + 1:02d}",
        "netAmount": f"{i * 125.5:.2f}",
        "isPaid": i % 2 == 0,
        "lines": [{"sku": "A-1", "qty": 2}],
    }
    for i in range(25)
]


class ConsoleNotifier:
    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        print(f"[{level.value}] {message}")


async def main(directory: str) -> None:
    configure_logging(json=False)
    config = SettingsFactory.create(ExportConfiguration, loaders=[DotenvSettingsLoader()])
    button = ExportButton(config, ExportService(FileSystemObjectStore(directory)), ConsoleNotifier())
    button.attach(InMemoryDataSource(ORDERS, visible_count=10))
    result = await button.press()
    if result is not None:
        print(f"wrote {result.location} ({result.row_count} rows, {result.column_count} columns)")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "."))
