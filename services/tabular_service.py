import logging
from typing import Any, List, Sequence

from models.tabular_models import CellKind, TabularModel, classify_cell
from services.errors import DecodeFailure

logger = logging.getLogger(__name__)


def _header_text(value: Any) -> str:
    kind = classify_cell(value)
    if kind == CellKind.EMPTY:
        return ""
    if kind == CellKind.NUMBER and isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _fit_row(row: Sequence[Any], width: int) -> tuple:
    cells = list(row[:width])
    if len(cells) < width:
        cells.extend([None] * (width - len(cells)))
    return tuple(cells)


def build(decoded_rows: Sequence[Sequence[Any]]) -> TabularModel:
    """
    Turn decoded sheet rows into a TabularModel.

    Row 0 becomes the (stringified) header row; every other row keeps its raw
    cell values and is padded or cut to the header width.
    """
    if not decoded_rows:
        raise DecodeFailure("The sheet contains no rows.")

    headers: List[str] = [_header_text(v) for v in decoded_rows[0]]
    width = len(headers)
    rows = tuple(_fit_row(row, width) for row in decoded_rows[1:])

    logger.info("Built tabular model: %d columns, %d rows", width, len(rows))
    return TabularModel(headers=tuple(headers), rows=rows)
