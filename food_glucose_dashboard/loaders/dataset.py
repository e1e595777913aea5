"""
Join-all loading of the three input sources.
"""

import logging
from dataclasses import dataclass, field

import pandas as pd

from food_glucose_dashboard.config import DataSources
from food_glucose_dashboard.errors import DataLoadError
from food_glucose_dashboard.loaders.base import TabularSource
from food_glucose_dashboard.loaders.dexcom import DexcomLoader
from food_glucose_dashboard.loaders.food_log import FoodLogLoader
from food_glucose_dashboard.loaders.heart_rate import HeartRateLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DashboardData:
    """The normalized food log, glucose and heart rate tables.

    Loaded once per session and treated as read-only afterwards: every
    view works on filtered copies. Instances compare by identity.
    """
    food_log: pd.DataFrame = field(repr=False)
    glucose: pd.DataFrame = field(repr=False)
    heart_rate: pd.DataFrame = field(repr=False)

    def summary(self) -> dict:
        return {
            'food_log_rows': len(self.food_log),
            'glucose_rows': len(self.glucose),
            'heart_rate_rows': len(self.heart_rate),
        }


def load_dashboard_data(
    food_log: TabularSource,
    glucose: TabularSource,
    heart_rate: TabularSource,
) -> DashboardData:
    """Load all three sources, or none.

    Args:
        food_log: Food log source (path, file-like, DataFrame or rows).
        glucose: Dexcom glucose source.
        heart_rate: Heart rate source.

    Returns:
        DashboardData with the three normalized tables.

    Raises:
        DataLoadError: If any source fails; no partial data is returned.
    """
    loaders = [
        ('food log', FoodLogLoader(food_log)),
        ('glucose', DexcomLoader(glucose)),
        ('heart rate', HeartRateLoader(heart_rate)),
    ]

    frames = {}
    for name, loader in loaders:
        try:
            frames[name] = loader.load()
        except (OSError, ValueError, pd.errors.ParserError) as e:
            logger.error("Aborting load: %s source failed: %s", name, e)
            raise DataLoadError(name, e) from e

    data = DashboardData(
        food_log=frames['food log'],
        glucose=frames['glucose'],
        heart_rate=frames['heart rate'],
    )
    logger.info("Dashboard data ready: %s", data.summary())
    return data


def load_from_config(sources: DataSources) -> DashboardData:
    """Load the sources named in the configuration."""
    return load_dashboard_data(sources.food_log, sources.glucose, sources.heart_rate)
