from typing import Optional
import io
import base64
import logging
import warnings

import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

from models.common_models import ChartSpec, ChartType

warnings.filterwarnings("ignore", category=UserWarning)

logger = logging.getLogger(__name__)


def _long_frame(spec: ChartSpec) -> pd.DataFrame:
    """
    Melt the points into (label, series, value) rows. Keys missing from a
    point produce no row, so sparse points simply leave gaps.
    """
    records = []
    for point in spec.points:
        for key in spec.series_keys:
            if key in point.values:
                records.append({"label": point.label, "series": key, "value": point.values[key]})
    return pd.DataFrame(records, columns=["label", "series", "value"])


def _draw_series(spec: ChartSpec) -> bool:
    df = _long_frame(spec)
    if df.empty:
        return False

    order = [p.label for p in spec.points]
    palette = dict(zip(spec.series_keys, spec.colors))

    if spec.chart_type == ChartType.BAR:
        sns.barplot(data=df, x="label", y="value", hue="series",
                    order=order, hue_order=spec.series_keys, palette=palette)
    else:
        position = {label: i for i, label in enumerate(order)}
        df["x"] = df["label"].map(position)
        sns.lineplot(data=df, x="x", y="value", hue="series",
                     hue_order=spec.series_keys, palette=palette, linewidth=2)
        plt.xticks(range(len(order)), order)
    plt.xlabel("")
    plt.ylabel("")
    return True


def _draw_pie(spec: ChartSpec) -> bool:
    if not spec.series_keys:
        return False
    key = spec.series_keys[0]
    values = [float(p.values.get(key, 0)) for p in spec.points]
    if not any(values):
        return False
    plt.pie(values, labels=[p.label for p in spec.points], colors=spec.colors)
    plt.axis("equal")
    return True


def generate_chart(spec: ChartSpec) -> Optional[str]:
    """Render a chart spec to a base64 PNG. None when there is nothing to draw."""
    if not spec.points:
        return None

    logger.debug("Rendering %s chart: %d points, keys=%s",
                 spec.chart_type.value, len(spec.points), spec.series_keys)

    plt.figure(figsize=(8, 5))

    try:
        if spec.chart_type == ChartType.PIE:
            drawn = _draw_pie(spec)
        else:
            drawn = _draw_series(spec)

        if not drawn:
            plt.close()
            return None

        buffer = io.BytesIO()
        plt.tight_layout()
        plt.savefig(buffer, format="png")
        plt.close()
        buffer.seek(0)

        return base64.b64encode(buffer.read()).decode("utf-8")

    except Exception as e:
        logger.error("Chart rendering failed: %s", e)
        plt.close()
        return None
