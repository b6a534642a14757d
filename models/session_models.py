from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from models.tabular_models import TabularModel


class SessionPhase(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"


class Severity(str, Enum):
    NORMAL = "normal"
    ERROR = "error"


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    severity: Severity = Severity.NORMAL


class CommandHistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    command: str
    result: str
    timestamp: datetime
    error: bool = False   # set when the analysis step failed


class SessionState(BaseModel):
    """Read-only snapshot of a session, handed out by the controller."""

    model_config = ConfigDict(frozen=True)

    phase: SessionPhase
    model: Optional[TabularModel] = None
    file_name: str = ""
    command_text: str = ""
    history: Tuple[CommandHistoryEntry, ...] = ()
    busy: bool = False
