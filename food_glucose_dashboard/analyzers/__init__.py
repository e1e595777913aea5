"""Aggregation, matching and glucose response analysis."""

from food_glucose_dashboard.analyzers.aggregation import aggregate_by_day, aggregates_to_frame
from food_glucose_dashboard.analyzers.glucose import (
    analyze_meal_response,
    meal_timestamp,
    meal_window,
    readings_in_window,
    summarize_selection,
)
from food_glucose_dashboard.analyzers.matching import find_nearest

__all__ = [
    "aggregate_by_day",
    "aggregates_to_frame",
    "analyze_meal_response",
    "find_nearest",
    "meal_timestamp",
    "meal_window",
    "readings_in_window",
    "summarize_selection",
]
