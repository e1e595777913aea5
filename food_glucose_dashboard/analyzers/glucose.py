"""
Glucose response analysis around a logged meal.

Readings are compared at clock-minute precision, the same precision as
the derived ``time`` field, so two readings logged within the same minute
are treated as simultaneous.
"""

import logging
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from food_glucose_dashboard.analyzers.matching import find_nearest
from food_glucose_dashboard.metrics.meal_response import MealResponse
from food_glucose_dashboard.metrics.selection_summary import SelectionSummary

logger = logging.getLogger(__name__)


def meal_timestamp(day: str, time: str) -> pd.Timestamp:
    """Rebuild a meal instant from its day and HH:MM time."""
    return pd.Timestamp(f"{day} {time}")


def meal_window(
    meal_time: pd.Timestamp,
    minutes: int = 60,
) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """Return (start, end) of the window centred on a meal."""
    offset = pd.Timedelta(minutes=minutes)
    return meal_time - offset, meal_time + offset


def clock_timestamps(df: pd.DataFrame) -> pd.Series:
    """Timestamps truncated to the minute."""
    return df['timestamp'].dt.floor('min')


def readings_in_window(
    df: pd.DataFrame,
    day: str,
    start: pd.Timestamp,
    end: pd.Timestamp,
    inclusive: bool = False,
) -> pd.DataFrame:
    """Filter readings to one day and a time window.

    Args:
        df: Normalized glucose or heart rate frame.
        day: Day (YYYY-MM-DD) the readings must belong to.
        start: Window start.
        end: Window end.
        inclusive: Whether readings exactly on a boundary are kept.

    Returns:
        Matching readings sorted by timestamp.
    """
    clock = clock_timestamps(df)
    if inclusive:
        in_window = (clock >= start) & (clock <= end)
    else:
        in_window = (clock > start) & (clock < end)
    subset = df[in_window & (df['day'] == day)]
    return subset.sort_values('timestamp', kind='stable')


def summarize_selection(
    glucose_df: pd.DataFrame,
    x0: pd.Timestamp,
    x1: pd.Timestamp,
) -> SelectionSummary:
    """Count and average the readings in the inclusive range [x0, x1].

    The bounds may be given in either order.
    """
    start, end = sorted((pd.Timestamp(x0), pd.Timestamp(x1)))
    clock = clock_timestamps(glucose_df)
    selected = glucose_df[(clock >= start) & (clock <= end)]

    return SelectionSummary(
        start=start,
        end=end,
        count=len(selected),
        mean_level=mean_level(selected),
    )


def analyze_meal_response(
    glucose_df: pd.DataFrame,
    meal_time: pd.Timestamp,
    heart_rate_df: Optional[pd.DataFrame] = None,
) -> MealResponse:
    """Summarize the glucose readings in a meal's window.

    Args:
        glucose_df: Readings already filtered to the meal window.
        meal_time: Meal instant.
        heart_rate_df: Heart rate readings in the same window, if any.

    Returns:
        MealResponse for the meal.
    """
    known = glucose_df[glucose_df['level'].notna()]

    response = {
        'meal_timestamp': meal_time,
        'readings_count': len(glucose_df),
    }

    nearest = find_nearest(known, meal_time)
    if nearest is not None:
        response['baseline'] = float(nearest['level'])
        response['baseline_time'] = nearest['time']

    if not known.empty:
        peak_row = known.loc[known['level'].idxmax()]
        response['peak'] = float(peak_row['level'])
        response['peak_time'] = peak_row['time']
        delta = peak_row['timestamp'].floor('min') - meal_time
        response['minutes_to_peak'] = delta.total_seconds() / 60

    if heart_rate_df is not None:
        beating = heart_rate_df[heart_rate_df['heart_rate'].notna()]
        nearest_hr = find_nearest(beating, meal_time)
        if nearest_hr is not None:
            response['heart_rate_at_meal'] = float(nearest_hr['heart_rate'])

    return MealResponse(**response)


def mean_level(glucose_df: pd.DataFrame) -> Optional[float]:
    """Mean glucose ignoring unknown readings (None when there are none)."""
    levels = glucose_df['level'].to_numpy(dtype=float)
    if np.isnan(levels).all():
        return None
    return float(np.nanmean(levels))
