from typing import Dict, Any, Optional

import config
from models.tabular_models import TabularModel

EMPTY_CELL = "—"


def format_cell(value: Any) -> str:
    return EMPTY_CELL if value is None else str(value)


def get_preview_rows(model: Optional[TabularModel], n_rows: Optional[int] = None) -> Dict[str, Any]:
    if model is None:
        return {"headers": [], "rows": [], "n_rows": 0}
    if n_rows is None:
        n_rows = config.PREVIEW_ROWS
    return {
        "headers": list(model.headers),
        "rows": [list(row) for row in model.rows[:n_rows]],
        "n_rows": model.n_rows,
    }
