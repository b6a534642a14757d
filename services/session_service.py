import logging
import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import config
from models.common_models import ChartSpec, ChartType, SessionSummary
from models.session_models import (
    CommandHistoryEntry,
    Notification,
    SessionPhase,
    SessionState,
    Severity,
)
from models.tabular_models import TabularModel
from services.chart_render_service import generate_chart
from services.chart_service import build_chart_spec
from services.command_service import CommandProcessor, CommandTask
from services.errors import (
    CommandInProgress,
    DecodeFailure,
    InvalidTransition,
    SessionNotFound,
    UnsupportedFileType,
)
from services.excel_reader_service import ensure_spreadsheet, pick_spreadsheet, read_first_sheet
from services.history_service import HistoryLog
from services.notification_service import NotificationSink
from services.tabular_service import build

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    notification: Notification
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SessionController:
    """
    Owns the state of one analysis session and is the only place it changes.

    EMPTY -> LOADED when a file is decoded, LOADED -> EMPTY on close().
    Decode and file-type errors end here as error notifications.
    """

    def __init__(
        self,
        session_id: str,
        processor: Optional[CommandProcessor] = None,
        history: Optional[HistoryLog] = None,
        notifications: Optional[NotificationSink] = None,
    ):
        self.session_id = session_id
        self._processor = processor or CommandProcessor()
        self._history = history if history is not None else HistoryLog(config.HISTORY_LIMIT)
        self.notifications = notifications or NotificationSink()

        self._phase = SessionPhase.EMPTY
        self._model: Optional[TabularModel] = None
        self._file_name = ""
        self._command_text = ""
        self._task: Optional[CommandTask] = None
        # bumped on close so late command results are dropped
        self._generation = 0

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def model(self) -> Optional[TabularModel]:
        return self._model

    @property
    def busy(self) -> bool:
        return self._task is not None

    def snapshot(self) -> SessionState:
        return SessionState(
            phase=self._phase,
            model=self._model,
            file_name=self._file_name,
            command_text=self._command_text,
            history=self._history.entries(),
            busy=self.busy,
        )

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            phase=self._phase,
            file_name=self._file_name,
            n_rows=self._model.n_rows if self._model else 0,
            headers=list(self._model.headers) if self._model else [],
            history_size=len(self._history),
            busy=self.busy,
        )

    # ---------- file input ----------

    def _reject_file_type(self, error: UnsupportedFileType) -> LoadResult:
        notification = self.notifications.notify(
            "Error", "Please upload an Excel file (.xlsx or .xls).", Severity.ERROR
        )
        return LoadResult(notification=notification, error=error)

    def load_file(self, file_name: str, content: bytes) -> LoadResult:
        """File-picker entry point."""
        try:
            ensure_spreadsheet(file_name)
        except UnsupportedFileType as e:
            return self._reject_file_type(e)

        if self._phase == SessionPhase.LOADED:
            raise InvalidTransition("Close the current dataset before loading another file.")

        try:
            model = build(read_first_sheet(content))
        except DecodeFailure as e:
            logger.warning("Session %s: could not load %s: %s", self.session_id, file_name, e)
            notification = self.notifications.notify(
                "Error", "Could not process the file.", Severity.ERROR
            )
            return LoadResult(notification=notification, error=e)

        self._model = model
        self._file_name = file_name
        self._phase = SessionPhase.LOADED
        logger.info("Session %s loaded %s", self.session_id, file_name)

        notification = self.notifications.notify("File loaded", f"{file_name} processed successfully")
        return LoadResult(notification=notification)

    def drop_files(self, files: Iterable[Tuple[str, bytes]]) -> LoadResult:
        """Drag-and-drop entry point: the first spreadsheet among the dropped files wins."""
        picked = pick_spreadsheet(files)
        if picked is None:
            return self._reject_file_type(UnsupportedFileType("No Excel file among the dropped files."))
        return self.load_file(*picked)

    def close(self) -> None:
        """Drop the dataset, file name, pending command and history together."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._generation += 1

        self._model = None
        self._file_name = ""
        self._command_text = ""
        self._history.clear()
        self._phase = SessionPhase.EMPTY
        logger.info("Session %s closed its dataset", self.session_id)

    # ---------- commands ----------

    def set_command_text(self, text: str) -> None:
        if self.busy:
            raise CommandInProgress("A command is already running.")
        self._command_text = text

    async def execute_command(self, text: Optional[str] = None) -> Optional[CommandHistoryEntry]:
        """
        Run the pending command (or `text`). Returns None without doing
        anything when there is no command or no dataset.
        """
        if text is not None:
            self.set_command_text(text)
        if self.busy:
            raise CommandInProgress("A command is already running.")

        command = self._command_text.strip()
        if not command or self._model is None:
            logger.debug("Session %s: nothing to execute", self.session_id)
            return None

        generation = self._generation
        task = self._processor.submit(command, self._model)
        self._task = task
        try:
            entry = await task.wait()
        finally:
            if self._task is task:
                self._task = None

        if entry is None or generation != self._generation:
            logger.info("Session %s: discarded result of %r after close", self.session_id, command)
            return None

        self._history.prepend(entry)
        self._command_text = ""
        self.notifications.notify("Command executed", "Result added to history")
        return entry

    def history(self) -> Tuple[CommandHistoryEntry, ...]:
        return self._history.entries()

    # ---------- charts ----------

    def charts(self, chart_type: ChartType, render: bool = False) -> ChartSpec:
        spec = build_chart_spec(self._model, chart_type)
        if render:
            spec.image_base64 = generate_chart(spec)
        return spec


# In-memory registry of live sessions
_SESSIONS: Dict[str, SessionController] = {}


def create_session() -> SessionController:
    session_id = uuid.uuid4().hex
    controller = SessionController(session_id)
    _SESSIONS[session_id] = controller
    logger.info("Created session %s", session_id)
    return controller


def get_session(session_id: str) -> SessionController:
    if session_id not in _SESSIONS:
        raise SessionNotFound(session_id)
    return _SESSIONS[session_id]


def delete_session(session_id: str) -> None:
    controller = _SESSIONS.pop(session_id, None)
    if controller is None:
        raise SessionNotFound(session_id)
    controller.close()
