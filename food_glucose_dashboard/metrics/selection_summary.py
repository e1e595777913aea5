"""
Summary of a brushed time range on the glucose detail chart.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional

import pandas as pd


@dataclass(frozen=True)
class SelectionSummary:
    """Readings inside an inclusive [start, end] brush."""
    start: pd.Timestamp
    end: pd.Timestamp
    count: int
    mean_level: Optional[float]  # None when no reading falls in the range

    @property
    def window_minutes(self) -> int:
        return int(round((self.end - self.start).total_seconds() / 60))

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def label(self) -> str:
        """Text shown above the brushed range."""
        if self.mean_level is None:
            return f"Time Window: {self.window_minutes} mins | No readings"
        return (
            f"Time Window: {self.window_minutes} mins | "
            f"Avg Glucose: {self.mean_level:.1f} mg/dL"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'window_minutes': self.window_minutes,
            'readings': self.count,
            'mean_mg_dl': round(self.mean_level, 1) if self.mean_level is not None else None,
        }
