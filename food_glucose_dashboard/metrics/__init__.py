"""Metrics dataclasses for the drill-down views."""

from food_glucose_dashboard.metrics.daily_aggregate import DailyAggregate
from food_glucose_dashboard.metrics.meal_response import MealResponse
from food_glucose_dashboard.metrics.selection_summary import SelectionSummary

__all__ = ["DailyAggregate", "MealResponse", "SelectionSummary"]
