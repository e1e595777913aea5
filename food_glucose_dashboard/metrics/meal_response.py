"""
Glucose response metrics for a single meal.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional

import pandas as pd


@dataclass(frozen=True)
class MealResponse:
    """Glucose around one meal, computed from the readings in its window.

    baseline is the reading nearest to the meal time; rise is the peak
    minus the baseline.
    """
    meal_timestamp: pd.Timestamp
    readings_count: int
    baseline: Optional[float] = None
    baseline_time: Optional[str] = None
    peak: Optional[float] = None
    peak_time: Optional[str] = None
    minutes_to_peak: Optional[float] = None
    heart_rate_at_meal: Optional[float] = None

    @property
    def rise(self) -> Optional[float]:
        if self.peak is None or self.baseline is None:
            return None
        return self.peak - self.baseline

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        rise = self.rise
        return {
            'meal_time': self.meal_timestamp.isoformat(),
            'readings_count': self.readings_count,
            'baseline_mg_dl': round(self.baseline, 1) if self.baseline is not None else None,
            'baseline_time': self.baseline_time,
            'peak_mg_dl': round(self.peak, 1) if self.peak is not None else None,
            'peak_time': self.peak_time,
            'rise_mg_dl': round(rise, 1) if rise is not None else None,
            'minutes_to_peak': self.minutes_to_peak,
            'heart_rate_at_meal_bpm': (
                round(self.heart_rate_at_meal) if self.heart_rate_at_meal is not None else None
            ),
        }
