"""Data loaders for food log, CGM and heart rate exports."""

from food_glucose_dashboard.loaders.dataset import (
    DashboardData,
    load_dashboard_data,
    load_from_config,
)
from food_glucose_dashboard.loaders.dexcom import DexcomLoader
from food_glucose_dashboard.loaders.food_log import FoodLogLoader
from food_glucose_dashboard.loaders.heart_rate import HeartRateLoader

__all__ = [
    "DashboardData",
    "DexcomLoader",
    "FoodLogLoader",
    "HeartRateLoader",
    "load_dashboard_data",
    "load_from_config",
]
