import datetime as dt
import io
import logging
import math
import os
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from services.errors import DecodeFailure, UnsupportedFileType

logger = logging.getLogger(__name__)

SPREADSHEET_EXTENSIONS = (".xlsx", ".xls")


def is_spreadsheet(file_name: str) -> bool:
    ext = os.path.splitext(file_name or "")[1]
    return ext.lower() in SPREADSHEET_EXTENSIONS


def ensure_spreadsheet(file_name: str) -> None:
    if not is_spreadsheet(file_name):
        raise UnsupportedFileType("Only Excel files (.xlsx, .xls) are supported.")


def pick_spreadsheet(files: Iterable[Tuple[str, bytes]]) -> Optional[Tuple[str, bytes]]:
    """
    Return the first (name, content) pair with a spreadsheet extension,
    the way a drop of several files is resolved. None when there is none.
    """
    for name, content in files:
        if is_spreadsheet(name):
            return name, content
    return None


def _to_cell(value: Any) -> Any:
    """Convert a pandas/numpy cell into a plain Python cell value."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, (float, np.floating)):
        value = float(value)
        if math.isnan(value):
            return None
        # Excel stores every number as a float
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        # the Excel readers hand blank cells over as ""
        return value if value != "" else None
    if isinstance(value, (pd.Timestamp, dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    return str(value)


def read_first_sheet(content: bytes) -> List[List[Any]]:
    """
    Decode spreadsheet bytes and return the first sheet as raw rows.
    Row 0 is the header row; no header handling happens here.
    """
    try:
        df = pd.read_excel(
            io.BytesIO(content),
            sheet_name=0,
            header=None,
            dtype=object,
            keep_default_na=False,
            na_filter=False,
        )
    except Exception as e:
        logger.warning("Spreadsheet decoding failed: %s", e)
        raise DecodeFailure(f"Could not decode spreadsheet: {e}") from e

    rows = [[_to_cell(v) for v in record] for record in df.itertuples(index=False, name=None)]
    logger.debug("Decoded %d raw rows, width %d", len(rows), df.shape[1])
    return rows
