from __future__ import annotations

import json
from typing import Any, Iterable

import numpy as np
import pandas as pd

from services.models import Row, SummaryStat


def _as_number_candidate(value: Any):
    """Reduce a cell to something pd.to_numeric can judge, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return value.strip() or None
    # dicts, lists and other nested JSON values
    return None


def coerce_numeric(values: Iterable[Any]) -> pd.Series:
    """Coerce cells to float; anything non-numeric (or non-finite) becomes NaN."""
    s = pd.Series([_as_number_candidate(v) for v in values], dtype=object)
    num = pd.to_numeric(s, errors="coerce").astype("float64")
    return num.where(np.isfinite(num))


def get_numeric_columns(rows: list[Row]) -> list[str]:
    """Columns whose value in the FIRST row is numeric.
    Later rows are not consulted, so a column that starts with text is never numeric.
    """
    if not rows:
        return []
    sample = rows[0]
    cols = list(sample.keys())
    first = coerce_numeric(sample[c] for c in cols)
    return [c for c, v in zip(cols, first) if pd.notna(v)]


def get_summary_stats(rows: list[Row], numeric_cols: list[str]) -> dict[str, SummaryStat]:
    """min/max/mean per column; non-numeric cells are skipped, empty columns omitted."""
    stats: dict[str, SummaryStat] = {}
    for col in numeric_cols:
        s = coerce_numeric(row.get(col) for row in rows).dropna()
        if s.empty:
            continue
        stats[col] = SummaryStat(
            min=float(s.min()),
            max=float(s.max()),
            mean=round(float(s.mean()), 2),
        )
    return stats


def build_preview(rows: list[Row], n_rows: int = 5) -> tuple[str, int]:
    """Return (pretty JSON of the first n_rows, number of rows not shown).
    Cells missing from a ragged line (None) are left out of the preview.
    """
    head = [{k: v for k, v in row.items() if v is not None} for row in rows[:n_rows]]
    text = json.dumps(head, indent=2, ensure_ascii=False, default=str)
    return text, max(len(rows) - n_rows, 0)
