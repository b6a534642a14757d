import math
from enum import Enum
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictInt, StrictStr

# bool is listed first so True/False never validate as numbers
CellValue = Optional[Union[StrictBool, StrictInt, StrictFloat, StrictStr]]


class CellKind(str, Enum):
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    EMPTY = "empty"


def classify_cell(value: Any) -> CellKind:
    """Map a raw cell to its variant. NaN counts as an empty cell."""
    if value is None:
        return CellKind.EMPTY
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return CellKind.EMPTY
        return CellKind.NUMBER
    return CellKind.TEXT


class TabularModel(BaseModel):
    """First sheet of a workbook: one header row and the data rows below it."""

    model_config = ConfigDict(frozen=True)

    headers: Tuple[str, ...]
    rows: Tuple[Tuple[CellValue, ...], ...]

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return len(self.headers)
