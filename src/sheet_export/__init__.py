"""
sheet_export – column/row planning and spreadsheet export for tabular records.

Import path convention::

    from sheet_export.application.export import ExportPlanner, ExportConfiguration
    from sheet_export.kernel.errors import EmptyDataError
    from sheet_export.observability.logging import configure_logging, get_logger
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
