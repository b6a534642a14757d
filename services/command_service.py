import asyncio
import logging
import uuid
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

import config
from models.session_models import CommandHistoryEntry
from models.tabular_models import TabularModel
from services.errors import AnalysisFailure

logger = logging.getLogger(__name__)

Analyzer = Callable[[str, TabularModel], str]


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


def describe_dataset(command: str, model: TabularModel) -> str:
    """Stand-in analysis: reports the shape of the data, does not interpret the command."""
    return (
        f'Analyzing command: "{command}"\n\n'
        f"Found {model.n_rows} rows of data.\n"
        f"Columns: {', '.join(model.headers)}\n\n"
        "Connect an external AI API key to enable full analysis."
    )


class CommandTask:
    """
    A single command run. Wraps an asyncio task so callers can look at its
    status, cancel it, and await the resulting history entry.
    """

    def __init__(self, command: str, model: TabularModel, analyzer: Analyzer, latency: float):
        self.command = command
        self._model = model
        self._analyzer = analyzer
        self._latency = latency
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> CommandHistoryEntry:
        await asyncio.sleep(self._latency)

        error = False
        try:
            result = self._analyzer(self.command, self._model)
        except AnalysisFailure as e:
            logger.warning("Analysis of %r failed: %s", self.command, e)
            result = f"Analysis failed: {e}"
            error = True
        except Exception as e:
            logger.exception("Analyzer crashed on %r", self.command)
            result = f"Analysis failed: {type(e).__name__}: {e}"
            error = True

        return CommandHistoryEntry(
            id=uuid.uuid4().hex,
            command=self.command,
            result=result,
            timestamp=datetime.now(),
            error=error,
        )

    @property
    def status(self) -> TaskStatus:
        if not self._task.done():
            return TaskStatus.PENDING
        if self._task.cancelled():
            return TaskStatus.CANCELLED
        if self._task.exception() is not None or self._task.result().error:
            return TaskStatus.FAILED
        return TaskStatus.COMPLETED

    def cancel(self) -> bool:
        return self._task.cancel()

    async def wait(self) -> Optional[CommandHistoryEntry]:
        """The finished entry, or None if the task was cancelled."""
        await asyncio.wait({self._task})
        if self._task.cancelled():
            return None
        return self._task.result()


class CommandProcessor:
    """
    Turns a command and the loaded model into a history entry after a fixed
    delay. It does not serialize calls; the session controller does.
    """

    def __init__(self, analyzer: Analyzer = describe_dataset, latency: Optional[float] = None):
        self.analyzer = analyzer
        self.latency = config.COMMAND_LATENCY_SECONDS if latency is None else latency

    def submit(self, command_text: str, model: TabularModel) -> CommandTask:
        command = command_text.strip()
        if not command:
            raise ValueError("Command must not be empty.")
        logger.info("Running command %r against %d rows", command, model.n_rows)
        return CommandTask(command, model, self.analyzer, self.latency)
