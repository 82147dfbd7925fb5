# services/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

Row = Dict[str, Any]


@dataclass(slots=True)
class SummaryStat:
    min: float
    max: float
    mean: float  # rounded to 2 decimals

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max, "mean": self.mean}


# Transientes Ergebnis einer Analyse (wird nicht gespeichert)
@dataclass(slots=True)
class AnalysisResult:
    filename: str
    rows: List[Row]
    preview: str = "[]"
    remaining_rows: int = 0
    numeric_columns: List[str] = field(default_factory=list)
    stats: Dict[str, SummaryStat] = field(default_factory=dict)
    chart_png: Optional[str] = None  # base64

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def columns(self) -> List[str]:
        return list(self.rows[0].keys()) if self.rows else []
