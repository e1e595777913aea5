"""
Heart rate data loader.

Parses cleaned heart rate CSV exports into the standardized heart rate schema.
"""

import logging

import pandas as pd

from food_glucose_dashboard.loaders.base import TimestampedLoader, coerce_numeric, find_column
from food_glucose_dashboard.records import HEART_RATE_SCHEMA

logger = logging.getLogger(__name__)


class HeartRateLoader(TimestampedLoader):
    """Loader for heart rate CSV exports (BPM, NaN when unreadable)."""

    SOURCE_NAME = "heart rate"

    HEART_RATE_COLUMNS = ['hr', 'heart_rate', 'Heart Rate']

    COLUMNS = HEART_RATE_SCHEMA

    def _normalize_fields(self, raw: pd.DataFrame, df: pd.DataFrame) -> None:
        if find_column(raw, self.HEART_RATE_COLUMNS) is None:
            logger.warning("Heart rate data has no heart rate column; values unknown")
        df['heart_rate'] = coerce_numeric(raw, self.HEART_RATE_COLUMNS)
