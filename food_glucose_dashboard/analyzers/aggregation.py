"""
Daily calorie aggregation over the food log.
"""

import logging
from typing import List

import pandas as pd

from food_glucose_dashboard.metrics.daily_aggregate import DailyAggregate
from food_glucose_dashboard.records import calorie_column

logger = logging.getLogger(__name__)


def aggregate_by_day(food_df: pd.DataFrame, nutrient: str = "carb") -> List[DailyAggregate]:
    """Sum total and secondary-nutrient calories per day.

    One entry per distinct day, in order of each day's first appearance.
    The percentage is deliberately left as NaN when a day's total is zero.

    Args:
        food_df: Normalized food log.
        nutrient: Secondary nutrient compared against total calories
            (carb, sugar, fiber, protein or fat).

    Returns:
        List of DailyAggregate.

    Raises:
        ValueError: If the nutrient is unknown.
    """
    secondary_col = calorie_column(nutrient)

    undated = int(food_df['day'].isna().sum())
    if undated:
        logger.warning("Skipping %d food log rows without a day", undated)

    grouped = food_df.groupby('day', sort=False).agg(
        total=('calorie', 'sum'),
        secondary=(secondary_col, 'sum'),
    )

    aggregates = []
    for day, row in grouped.iterrows():
        total = float(row['total'])
        secondary = float(row['secondary'])
        percent = float('nan') if total == 0 else secondary / total * 100
        aggregates.append(DailyAggregate(
            day=day,
            total=total,
            secondary_calories=secondary,
            percent=percent,
            nutrient=nutrient,
        ))

    logger.debug("Aggregated %d days of %s calories", len(aggregates), nutrient)
    return aggregates


def aggregates_to_frame(aggregates: List[DailyAggregate]) -> pd.DataFrame:
    """Tabulate aggregates for display or CSV export."""
    return pd.DataFrame([a.to_dict() for a in aggregates])
