"""Application export – ExportPlanner.

Decides, for one export trigger, the ordered column list and the row set,
optionally through the selection dialog, then hands the packaged request to
the spreadsheet builder and reports the outcome to the user.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from sheet_export.application.export.candidates import (
    CandidateColumn,
    build_candidate_list,
    template_candidates,
)
from sheet_export.application.export.configuration import ExportConfiguration
from sheet_export.application.export.ports import (
    Cancel,
    DataSource,
    NotificationLevel,
    Notifier,
    Record,
    RowScope,
    SelectionUI,
    SpreadsheetBuilder,
)
from sheet_export.application.export.request import (
    ColumnDef,
    ExportFormat,
    ExportRequest,
    ExportResult,
)
from sheet_export.application.export.selection import SelectionModel
from sheet_export.kernel.errors import (
    BaseError,
    ConfigurationError,
    DataSourceUnavailableError,
    EmptyDataError,
    ExportBuildError,
    NoSelectionError,
)
from sheet_export.observability.logging import export_run_context, get_logger, new_run_id

__all__ = ["ExportPlanner", "ExportRun"]

logger = get_logger(__name__)

SUCCESS_MESSAGE = "Excel export finished"


@dataclass
class ExportRun:
    """Columns and rows resolved for one confirmed export."""

    run_id: str
    selected_columns: list[ColumnDef]
    row_scope: RowScope
    rows: list[Record] = field(default_factory=list)


class ExportPlanner:
    """Column/row resolution and dialog coordination for one export control.

    All collaborators are injected.  At most one run is in flight at a time:
    a trigger arriving while the dialog is open or a build is pending is
    ignored.
    """

    def __init__(
        self,
        config: ExportConfiguration,
        data_source: DataSource,
        builder: SpreadsheetBuilder,
        notifier: Notifier,
        selection_ui: SelectionUI | None = None,
        *,
        export_format: ExportFormat = "xlsx",
    ) -> None:
        if config.show_selection_dialog and selection_ui is None:
            raise ConfigurationError(
                "show_selection_dialog is enabled but no selection UI was supplied"
            )
        self._config = config
        self._source = data_source
        self._builder = builder
        self._notifier = notifier
        self._ui = selection_ui
        self._format: ExportFormat = export_format
        self._model: SelectionModel | None = None
        self._busy = False

    @property
    def config(self) -> ExportConfiguration:
        return self._config

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def selection_model(self) -> SelectionModel:
        if self._model is None:
            self._model = SelectionModel(self._config)
        return self._model

    # ------------------------------------------------------------------
    # Trigger
    # ------------------------------------------------------------------

    async def on_export_triggered(self) -> ExportResult | None:
        """Run one export attempt; returns the build result or ``None``.

        Every refusal and failure is reported through the notifier and logged;
        nothing from the taxonomy in :mod:`sheet_export.kernel.errors` escapes.
        """
        if self._busy:
            logger.info("export.ignored_busy")
            return None

        self._busy = True
        try:
            with export_run_context(new_run_id()) as run_id:
                try:
                    self._ensure_data()
                    if self._config.show_selection_dialog:
                        return await self._run_with_dialog(run_id)
                    return await self._export(run_id, self.resolve_columns(None), self.default_scope)
                except BaseError as exc:
                    self._report(exc)
                    return None
        finally:
            self._busy = False

    @property
    def default_scope(self) -> RowScope:
        return RowScope.ALL_ROWS if self._config.export_all_rows else RowScope.VISIBLE_ROWS

    async def _run_with_dialog(self, run_id: str) -> ExportResult | None:
        assert self._ui is not None
        candidates = self.build_candidate_list()
        model = self.selection_model
        model.load(
            candidates,
            all_rows_count=len(self._read(self._source.get_all_records)),
            visible_rows_count=len(self._read(self._source.get_visible_records)),
        )
        self._ui.open(model)
        model.is_open = True
        logger.info("export.dialog_opened", candidates=len(candidates))
        try:
            while True:
                event = await self._ui.next_event()
                if isinstance(event, Cancel):
                    logger.info("export.cancelled")
                    return None
                try:
                    selection = model.selected_columns()
                    if not selection:
                        raise NoSelectionError()
                    return await self._export(run_id, self.resolve_columns(selection), event.scope)
                except BaseError as exc:
                    # The dialog stays open so the user can correct or retry.
                    self._report(exc)
        finally:
            self._close_dialog()

    def _close_dialog(self) -> None:
        if self._ui is not None and self._model is not None and self._model.is_open:
            self._ui.close()
        if self._model is not None:
            self._model.reset()

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def build_candidate_list(self) -> list[CandidateColumn]:
        """Candidates for the selection dialog, ordered per the configuration."""
        config = self._config
        template: Mapping[str, Any] | None = None
        if not (config.has_defined_properties and config.show_only_defined_properties):
            template = self.template()
        return build_candidate_list(config, template)

    def template(self) -> Mapping[str, Any] | None:
        """First record of the bound data, used as the structural template."""
        visible = self._read(self._source.get_visible_records)
        if visible:
            return visible[0]
        records = self._read(self._source.get_all_records)
        return records[0] if records else None

    def resolve_columns(self, selection: Sequence[CandidateColumn] | None) -> list[ColumnDef]:
        """Final ordered export columns.

        An explicit *selection* wins; otherwise the declared properties are
        used unless ``export_all_columns`` asks for every template field.
        """
        config = self._config
        if selection:
            columns = []
            for candidate in selection:
                prop = config.find_property(candidate.source_field)
                columns.append(
                    ColumnDef(
                        key=candidate.source_field,
                        header=candidate.title,
                        type=candidate.data_type,
                        wrap=prop.wrap if prop is not None else False,
                    )
                )
            return columns
        if config.has_defined_properties and not config.export_all_columns:
            return [ColumnDef.from_property(p) for p in config.properties]
        template = self.template()
        return [
            ColumnDef(key=c.source_field, header=c.title, type=c.data_type, wrap=c.wrap)
            for c in template_candidates(config, template or {})
        ]

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def resolve_rows(self, scope: RowScope) -> list[Record]:
        if scope is RowScope.ALL_ROWS:
            return list(self._read(self._source.get_all_records))
        return list(self._read(self._source.get_visible_records))

    def _ensure_data(self) -> None:
        if not self._read(self._source.get_all_records) and not self._read(
            self._source.get_visible_records
        ):
            raise EmptyDataError()

    def _read(self, getter: Any) -> Sequence[Record]:
        try:
            return getter()
        except BaseError:
            raise
        except Exception as exc:
            logger.exception("data_source.read_failed", getter=getattr(getter, "__name__", None))
            raise DataSourceUnavailableError(
                "Unable to read the data to export", cause=exc
            ) from exc

    # ------------------------------------------------------------------
    # Hand-off
    # ------------------------------------------------------------------

    async def _export(self, run_id: str, columns: list[ColumnDef], scope: RowScope) -> ExportResult:
        if not columns:
            raise EmptyDataError("No properties to export")
        rows = self.resolve_rows(scope)
        if not rows:
            raise EmptyDataError()
        run = ExportRun(run_id=run_id, selected_columns=columns, row_scope=scope, rows=rows)
        request = self.package(run)
        logger.info(
            "export.started",
            scope=scope.value,
            columns=len(columns),
            rows=len(rows),
            file_name=request.file_name,
        )
        try:
            result = await self._builder.build(request)
        except BaseError:
            raise
        except Exception as exc:
            raise ExportBuildError(
                f"Export failed: {exc}", file_name=request.file_name, cause=exc
            ) from exc
        logger.info("export.finished", location=result.location, size_bytes=result.size_bytes)
        self._notifier.notify(SUCCESS_MESSAGE, NotificationLevel.SUCCESS)
        return result

    def package(self, run: ExportRun) -> ExportRequest:
        return ExportRequest(
            columns=list(run.selected_columns),
            rows=run.rows,
            sheet_name=self._config.sheet_name,
            file_name=self._config.file_name,
            format=self._format,
        )

    def _report(self, exc: BaseError) -> None:
        if isinstance(exc, (EmptyDataError, NoSelectionError)):
            logger.info("export.refused", code=exc.code, reason=exc.message)
            self._notifier.notify(exc.message, NotificationLevel.WARNING)
        else:
            logger.error("export.failed", code=exc.code, reason=exc.message, detail=exc.detail)
            self._notifier.notify(exc.message, NotificationLevel.ERROR)
