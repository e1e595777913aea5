"""
Dexcom CGM data loader.

Parses cleaned Dexcom CSV exports into the standardized glucose schema.
"""

import logging

import pandas as pd

from food_glucose_dashboard.loaders.base import TimestampedLoader, coerce_numeric, find_column
from food_glucose_dashboard.records import GLUCOSE_SCHEMA

logger = logging.getLogger(__name__)


class DexcomLoader(TimestampedLoader):
    """Loader for Dexcom CGM CSV exports.

    Readings are kept in file order and are not assumed to be evenly
    spaced. An unreadable glucose value becomes NaN: zero would be a
    physiologically meaningful (and wrong) reading.
    """

    SOURCE_NAME = "glucose"

    # Known column name variations across Dexcom versions
    GLUCOSE_COLUMNS = [
        'Glucose Value (mg/dL)',
        'Glucose Value',
        'EGV',
    ]

    EVENT_TYPE_COLUMNS = [
        'Event Type',
        'EventType',
    ]

    COLUMNS = GLUCOSE_SCHEMA

    def _normalize_fields(self, raw: pd.DataFrame, df: pd.DataFrame) -> None:
        if find_column(raw, self.GLUCOSE_COLUMNS) is None:
            logger.warning("Glucose data has no glucose value column; levels unknown")
        df['level'] = coerce_numeric(raw, self.GLUCOSE_COLUMNS)

        # Raw Clarity exports mix calibrations and events in with EGVs
        event_col = find_column(raw, self.EVENT_TYPE_COLUMNS)
        if event_col is not None:
            not_egv = raw[event_col].astype(str) != 'EGV'
            df.loc[not_egv, 'level'] = float('nan')
