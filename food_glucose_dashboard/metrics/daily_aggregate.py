"""
Daily aggregate dataclass for the calendar view.
"""

import math
from dataclasses import dataclass
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class DailyAggregate:
    """Calorie totals for one day of the food log.

    percent is secondary_calories / total * 100, and NaN when the day's
    total is zero.
    """
    day: str
    total: float
    secondary_calories: float
    percent: float
    nutrient: str = "carb"

    @property
    def has_percent(self) -> bool:
        return not math.isnan(self.percent)

    @property
    def plot_total(self) -> float:
        """Total as a bar height: NaN draws as a zero-height bar."""
        return 0.0 if math.isnan(self.total) else self.total

    @property
    def plot_secondary(self) -> float:
        return 0.0 if math.isnan(self.secondary_calories) else self.secondary_calories

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        percent: Optional[float] = round(self.percent, 2) if self.has_percent else None
        return {
            'day': self.day,
            'total_kcal': round(self.total, 1),
            f'{self.nutrient}_kcal': round(self.secondary_calories, 1),
            f'{self.nutrient}_pct': percent,
        }
