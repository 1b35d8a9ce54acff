"""Application export – ExportButton, the toolkit-neutral control state."""
from __future__ import annotations

from sheet_export.application.export.configuration import ExportConfiguration
from sheet_export.application.export.planner import ExportPlanner
from sheet_export.application.export.ports import (
    DataSource,
    Notifier,
    SelectionUI,
    SpreadsheetBuilder,
    Unsubscribe,
)
from sheet_export.application.export.request import ExportFormat, ExportResult
from sheet_export.kernel.errors import ConfigurationError
from sheet_export.observability.logging import get_logger

__all__ = ["ExportButton"]

logger = get_logger(__name__)

DEFAULT_TOOLTIP = "Download Excel"


class ExportButton:
    """Enabled/visible state of an export control plus its planner.

    The host calls :meth:`attach` once its data source is ready.  Until then
    the button is disabled; attaching ``None`` hides it and logs the
    configuration problem once.  While attached, the button is enabled iff
    the data source has at least one visible record.
    """

    def __init__(
        self,
        config: ExportConfiguration,
        builder: SpreadsheetBuilder,
        notifier: Notifier,
        selection_ui: SelectionUI | None = None,
        *,
        tooltip: str | None = None,
        export_format: ExportFormat = "xlsx",
    ) -> None:
        self._config = config
        self._builder = builder
        self._notifier = notifier
        self._ui = selection_ui
        self._format: ExportFormat = export_format
        self.tooltip = tooltip or DEFAULT_TOOLTIP
        self.visible = True
        self.enabled = False
        self._source: DataSource | None = None
        self._planner: ExportPlanner | None = None
        self._unsubscribe: Unsubscribe | None = None
        self._config_error_logged = False

    @property
    def planner(self) -> ExportPlanner | None:
        return self._planner

    @property
    def busy(self) -> bool:
        return self._planner is not None and self._planner.busy

    def attach(self, source: DataSource | None) -> None:
        """Ready event: link the control to its data source."""
        self.detach()
        if source is None:
            self._fail_configuration(ConfigurationError("Export control has no data source to export"))
            return
        try:
            self._planner = ExportPlanner(
                self._config,
                source,
                self._builder,
                self._notifier,
                self._ui,
                export_format=self._format,
            )
        except ConfigurationError as exc:
            self._fail_configuration(exc)
            return
        self._source = source
        self.visible = True
        self._unsubscribe = source.on_content_changed(self.refresh)
        self.refresh()
        logger.debug("export_button.attached", enabled=self.enabled)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = None
        self._source = None
        self._planner = None
        self.enabled = False

    def refresh(self) -> None:
        """Re-evaluate ``enabled`` from the visible record count."""
        if self._source is None:
            self.enabled = False
            return
        try:
            self.enabled = len(self._source.get_visible_records()) > 0
        except Exception:  # noqa: BLE001
            logger.warning("export_button.refresh_failed", exc_info=True)
            self.enabled = False

    async def press(self) -> ExportResult | None:
        if self._planner is None or not (self.visible and self.enabled):
            logger.debug("export_button.press_ignored", visible=self.visible, enabled=self.enabled)
            return None
        return await self._planner.on_export_triggered()

    def _fail_configuration(self, exc: ConfigurationError) -> None:
        self.visible = False
        self.enabled = False
        if not self._config_error_logged:
            logger.error("export_button.misconfigured", code=exc.code, reason=exc.message)
            self._config_error_logged = True
