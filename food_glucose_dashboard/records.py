"""
Normalized record schema shared by loaders, analyzers and views.

Collections are DataFrames with the column sets below. Single rows are
handed to callers as frozen dataclasses.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import pandas as pd


DAY_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# Nutrient -> (gram column, calorie column, kcal per gram)
MACRO_FACTORS: Dict[str, tuple] = {
    'sugar': ('sugar', 'sugar_calories', 4),
    'carb': ('carbs', 'carb_calories', 4),
    'fiber': ('fiber', 'fiber_calories', 4),
    'protein': ('protein', 'protein_calories', 4),
    'fat': ('fat', 'fat_calories', 9),
}

TIME_SCHEMA = ['timestamp', 'day', 'time']

FOOD_LOG_SCHEMA = TIME_SCHEMA + [
    'food', 'calorie',
    'sugar', 'carbs', 'fiber', 'protein', 'fat',
    'sugar_calories', 'carb_calories', 'fiber_calories',
    'protein_calories', 'fat_calories',
]

GLUCOSE_SCHEMA = TIME_SCHEMA + ['level']

HEART_RATE_SCHEMA = TIME_SCHEMA + ['heart_rate']


def calorie_column(nutrient: str) -> str:
    """Return the calorie-equivalent column for a nutrient name.

    Raises:
        ValueError: If the nutrient has no conversion factor.
    """
    try:
        return MACRO_FACTORS[nutrient][1]
    except KeyError:
        raise ValueError(
            f"Unknown nutrient {nutrient!r}. Expected one of {', '.join(MACRO_FACTORS)}"
        ) from None


def add_calorie_equivalents(df: pd.DataFrame) -> pd.DataFrame:
    """Derive the *_calories columns from the gram columns."""
    for grams_col, calories_col, factor in MACRO_FACTORS.values():
        df[calories_col] = df[grams_col] * factor
    return df


def _timestamp(value: Any) -> Optional[pd.Timestamp]:
    if value is None or pd.isna(value):
        return None
    return pd.Timestamp(value)


def _text(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return str(value)


@dataclass(frozen=True)
class FoodLogRecord:
    """One logged food item.

    Calorie equivalents are derived from the gram fields on access, so they
    always agree with the grams.
    """
    timestamp: Optional[pd.Timestamp]
    day: Optional[str]
    time: Optional[str]
    food: Optional[str]
    calorie: float = 0.0
    sugar: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0
    protein: float = 0.0
    fat: float = 0.0

    @property
    def sugar_calories(self) -> float:
        return self.sugar * MACRO_FACTORS['sugar'][2]

    @property
    def carb_calories(self) -> float:
        return self.carbs * MACRO_FACTORS['carb'][2]

    @property
    def fiber_calories(self) -> float:
        return self.fiber * MACRO_FACTORS['fiber'][2]

    @property
    def protein_calories(self) -> float:
        return self.protein * MACRO_FACTORS['protein'][2]

    @property
    def fat_calories(self) -> float:
        return self.fat * MACRO_FACTORS['fat'][2]

    def nutrient_calories(self, nutrient: str) -> float:
        """Calorie equivalent for any nutrient in MACRO_FACTORS."""
        return getattr(self, calorie_column(nutrient))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'FoodLogRecord':
        """Build a record from a normalized food log row."""
        return cls(
            timestamp=_timestamp(row['timestamp']),
            day=_text(row['day']),
            time=_text(row['time']),
            food=_text(row['food']),
            calorie=float(row['calorie']),
            sugar=float(row['sugar']),
            carbs=float(row['carbs']),
            fiber=float(row['fiber']),
            protein=float(row['protein']),
            fat=float(row['fat']),
        )


@dataclass(frozen=True)
class GlucoseRecord:
    """One CGM reading in mg/dL (NaN when the value was unreadable)."""
    timestamp: Optional[pd.Timestamp]
    day: Optional[str]
    time: Optional[str]
    level: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'GlucoseRecord':
        return cls(
            timestamp=_timestamp(row['timestamp']),
            day=_text(row['day']),
            time=_text(row['time']),
            level=float(row['level']),
        )


@dataclass(frozen=True)
class HeartRateRecord:
    """One heart rate reading in BPM (NaN when the value was unreadable)."""
    timestamp: Optional[pd.Timestamp]
    day: Optional[str]
    time: Optional[str]
    heart_rate: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'HeartRateRecord':
        return cls(
            timestamp=_timestamp(row['timestamp']),
            day=_text(row['day']),
            time=_text(row['time']),
            heart_rate=float(row['heart_rate']),
        )
