from typing import Dict, List, Optional, Union
from enum import Enum
from pydantic import BaseModel, Field

from models.session_models import CommandHistoryEntry, Notification, SessionPhase


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"


class ChartPoint(BaseModel):
    label: str                                    # "Row 1", "Row 2", ...
    values: Dict[str, Union[int, float]] = Field(default_factory=dict)


class ChartSpec(BaseModel):
    chart_type: ChartType
    points: List[ChartPoint]
    series_keys: List[str]
    colors: List[str]
    image_base64: Optional[str] = None


class SessionSummary(BaseModel):
    session_id: str
    phase: SessionPhase
    file_name: str
    n_rows: int = 0
    headers: List[str] = []
    history_size: int = 0
    busy: bool = False


class UploadResponse(BaseModel):
    session: SessionSummary
    notification: Notification


class PreviewRequest(BaseModel):
    session_id: str
    n_rows: Optional[int] = None


class ChartRequest(BaseModel):
    session_id: str
    chart_type: ChartType = ChartType.BAR
    render: bool = False


class CommandRequest(BaseModel):
    session_id: str
    command: str


class CommandResponse(BaseModel):
    entry: CommandHistoryEntry
    notification: Optional[Notification] = None
