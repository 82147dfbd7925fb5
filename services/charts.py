from __future__ import annotations

import base64
import io

import matplotlib
matplotlib.use("Agg")  # headless backend, no display on the server
import matplotlib.pyplot as plt

from services.data_summary import coerce_numeric
from services.models import Row

# Maximal so viele X-Beschriftungen, sonst wird die Achse unlesbar
MAX_XTICKS = 12


def render_trend_chart(rows: list[Row], numeric_cols: list[str], max_rows: int = 50) -> str | None:
    """Line chart of the numeric columns over the first ``max_rows`` rows.

    The x axis uses the values of the first column of the first row, in row
    order, as categorical labels. Returns a base64 PNG or None if there is
    nothing to plot.
    """
    if not rows or not numeric_cols:
        return None

    data = rows[:max_rows]
    x_key = next(iter(rows[0].keys()))
    labels = ["" if r.get(x_key) is None else str(r.get(x_key)) for r in data]
    positions = list(range(len(data)))

    fig, ax = plt.subplots(figsize=(10, 4))
    try:
        ax.grid(True, linestyle="--", alpha=0.6)
        for col in numeric_cols:
            ys = coerce_numeric(r.get(col) for r in data)
            ax.plot(positions, ys.to_numpy(), label=str(col))

        step = max(1, len(positions) // MAX_XTICKS)
        ax.set_xticks(positions[::step])
        ax.set_xticklabels(labels[::step], rotation=30, ha="right")
        ax.set_xlabel(str(x_key))
        ax.legend(loc="best")

        buf = io.BytesIO()
        fig.savefig(buf, format="png", bbox_inches="tight")
    finally:
        plt.close(fig)

    return base64.b64encode(buf.getvalue()).decode("ascii")
