"""
Food log loader.

Parses cleaned food log CSV exports into the standardized food log schema.
"""

import logging

import pandas as pd

from food_glucose_dashboard.loaders.base import TimestampedLoader, coerce_numeric, find_column
from food_glucose_dashboard.records import FOOD_LOG_SCHEMA, add_calorie_equivalents

logger = logging.getLogger(__name__)


class FoodLogLoader(TimestampedLoader):
    """Loader for food log CSV exports.

    Nutrient quantities are additive, so a missing or non-numeric value is
    treated as 0 g (or 0 kcal) rather than unknown.
    """

    SOURCE_NAME = "food log"

    FOOD_COLUMNS = ['logged_food', 'food', 'Food']

    # Standardized column -> known source column names
    NUTRIENT_COLUMNS = {
        'calorie': ['calorie', 'calories', 'Calories'],
        'sugar': ['sugar', 'Sugar'],
        'carbs': ['total_carb', 'carbs', 'Carbohydrates'],
        'fiber': ['dietary_fiber', 'fiber', 'Fiber'],
        'protein': ['protein', 'Protein'],
        'fat': ['total_fat', 'fat', 'Fat'],
    }

    COLUMNS = FOOD_LOG_SCHEMA

    def _normalize_fields(self, raw: pd.DataFrame, df: pd.DataFrame) -> None:
        food_col = find_column(raw, self.FOOD_COLUMNS)
        if food_col is None:
            logger.warning("Food log has no food name column; names left empty")
            df['food'] = None
        else:
            df['food'] = raw[food_col]

        for column, candidates in self.NUTRIENT_COLUMNS.items():
            if find_column(raw, candidates) is None:
                logger.debug("Food log has no %s column; defaulting to 0", column)
            df[column] = coerce_numeric(raw, candidates, default=0.0)

        add_calorie_equivalents(df)
