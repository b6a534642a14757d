from enum import Enum
from typing import List, Optional

import config
from models.common_models import ChartPoint, ChartSpec, ChartType
from models.tabular_models import CellKind, TabularModel, classify_cell

PALETTE = ["#9b87f5", "#0EA5E9", "#F97316", "#10B981", "#EC4899"]

# Series key used by the pie chart when the first point has no numbers
PIE_FALLBACK_KEY = "value"


class SeriesKeyPolicy(str, Enum):
    FIRST_POINT = "first_point"
    UNION = "union"


def project(model: Optional[TabularModel], limit: Optional[int] = None) -> List[ChartPoint]:
    """
    One ChartPoint per leading row (at most `limit`), holding only the cells
    that are numbers. Non-numeric and empty cells are left out, not zeroed.
    """
    if model is None or not model.rows:
        return []
    if limit is None:
        limit = config.CHART_ROW_LIMIT

    points: List[ChartPoint] = []
    for index, row in enumerate(model.rows[:limit]):
        values = {}
        for header, value in zip(model.headers, row):
            if classify_cell(value) == CellKind.NUMBER:
                values[header] = value
        points.append(ChartPoint(label=f"Row {index + 1}", values=values))
    return points


def series_keys(points: List[ChartPoint], policy: SeriesKeyPolicy = SeriesKeyPolicy.FIRST_POINT) -> List[str]:
    if not points:
        return []
    if policy == SeriesKeyPolicy.FIRST_POINT:
        return list(points[0].values)

    keys: List[str] = []
    for point in points:
        for key in point.values:
            if key not in keys:
                keys.append(key)
    return keys


def palette_colors(count: int) -> List[str]:
    return [PALETTE[i % len(PALETTE)] for i in range(count)]


def pie_key(points: List[ChartPoint]) -> str:
    if points and points[0].values:
        return next(iter(points[0].values))
    return PIE_FALLBACK_KEY


def build_chart_spec(
    model: Optional[TabularModel],
    chart_type: ChartType,
    policy: Optional[SeriesKeyPolicy] = None,
) -> ChartSpec:
    """Shape the projected points for a bar, line or pie chart."""
    if policy is None:
        policy = SeriesKeyPolicy(config.SERIES_KEY_POLICY)

    points = project(model)

    if chart_type == ChartType.PIE:
        sectors = points[: config.PIE_SECTOR_LIMIT]
        keys = [pie_key(points)] if points else []
        return ChartSpec(
            chart_type=chart_type,
            points=sectors,
            series_keys=keys,
            colors=palette_colors(len(sectors)),
        )

    keys = series_keys(points, policy)
    return ChartSpec(
        chart_type=chart_type,
        points=points,
        series_keys=keys,
        colors=palette_colors(len(keys)),
    )
