"""Tests for meal windows, brush summaries and meal response."""

import pandas as pd
import pytest

from food_glucose_dashboard.analyzers import (
    analyze_meal_response,
    meal_timestamp,
    meal_window,
    readings_in_window,
    summarize_selection,
)
from food_glucose_dashboard.loaders import DexcomLoader, HeartRateLoader


def _glucose(rows):
    return DexcomLoader(
        [{"datetime": when, "Glucose Value (mg/dL)": level} for when, level in rows]
    ).load()


@pytest.fixture
def window_readings():
    return _glucose([
        ("2023-05-01 11:00:00", "95"),
        ("2023-05-01 11:30:00", "100"),
        ("2023-05-01 12:30:00", "110"),
        ("2023-05-01 13:30:00", "120"),
    ])


def test_meal_window_is_centred_on_meal() -> None:
    eaten_at = meal_timestamp("2023-05-01", "12:00")

    start, end = meal_window(eaten_at, minutes=60)

    assert eaten_at == pd.Timestamp("2023-05-01 12:00")
    assert start == pd.Timestamp("2023-05-01 11:00")
    assert end == pd.Timestamp("2023-05-01 13:00")


def test_open_window_excludes_boundary_readings(window_readings) -> None:
    start, end = meal_window(meal_timestamp("2023-05-01", "12:00"))

    selected = readings_in_window(window_readings, "2023-05-01", start, end)

    assert list(selected['time']) == ["11:30", "12:30"]


def test_inclusive_window_keeps_boundary_readings(window_readings) -> None:
    start, end = meal_window(meal_timestamp("2023-05-01", "12:00"))

    selected = readings_in_window(window_readings, "2023-05-01", start, end, inclusive=True)

    assert list(selected['time']) == ["11:00", "11:30", "12:30"]


def test_window_readings_are_sorted_and_day_filtered() -> None:
    readings = _glucose([
        ("2023-05-01 12:20:00", "120"),
        ("2023-05-01 11:40:00", "100"),
        ("2023-05-02 12:00:00", "150"),
    ])
    start, end = meal_window(meal_timestamp("2023-05-01", "12:00"))

    selected = readings_in_window(readings, "2023-05-01", start, end)

    assert list(selected['level']) == [100.0, 120.0]


def test_seconds_are_ignored_at_boundary() -> None:
    readings = _glucose([("2023-05-01 11:00:40", "95")])
    start, end = meal_window(meal_timestamp("2023-05-01", "12:00"))

    assert readings_in_window(readings, "2023-05-01", start, end).empty


def test_brush_summary_count_and_mean() -> None:
    readings = _glucose([
        ("2023-05-01 11:40:00", "90"),
        ("2023-05-01 12:00:00", "100"),
        ("2023-05-01 12:10:00", "110"),
        ("2023-05-01 12:20:00", "120"),
    ])

    summary = summarize_selection(
        readings, pd.Timestamp("2023-05-01 12:00"), pd.Timestamp("2023-05-01 12:20")
    )

    assert summary.count == 3
    assert summary.mean_level == 110.0
    assert summary.window_minutes == 20
    assert summary.label() == "Time Window: 20 mins | Avg Glucose: 110.0 mg/dL"


def test_brush_bounds_in_either_order(window_readings) -> None:
    forward = summarize_selection(
        window_readings, pd.Timestamp("2023-05-01 11:15"), pd.Timestamp("2023-05-01 12:45")
    )
    backward = summarize_selection(
        window_readings, pd.Timestamp("2023-05-01 12:45"), pd.Timestamp("2023-05-01 11:15")
    )

    assert forward == backward
    assert forward.count == 2


def test_empty_brush_has_no_mean(window_readings) -> None:
    summary = summarize_selection(
        window_readings, pd.Timestamp("2023-05-01 11:40"), pd.Timestamp("2023-05-01 12:10")
    )

    assert summary.is_empty
    assert summary.mean_level is None
    assert summary.label() == "Time Window: 30 mins | No readings"


def test_unknown_levels_are_counted_but_not_averaged() -> None:
    readings = _glucose([
        ("2023-05-01 12:00:00", "100"),
        ("2023-05-01 12:05:00", "Low"),
    ])

    summary = summarize_selection(
        readings, pd.Timestamp("2023-05-01 12:00"), pd.Timestamp("2023-05-01 12:05")
    )

    assert summary.count == 2
    assert summary.mean_level == 100.0


def test_meal_response() -> None:
    readings = _glucose([
        ("2023-05-01 11:30:00", "100"),
        ("2023-05-01 12:10:00", "110"),
        ("2023-05-01 12:40:00", "135"),
        ("2023-05-01 12:50:00", "Low"),
    ])
    heart_rate = HeartRateLoader([
        {"datetime": "2023-05-01 11:59:00", "hr": ""},
        {"datetime": "2023-05-01 12:03:00", "hr": "81"},
    ]).load()
    eaten_at = meal_timestamp("2023-05-01", "12:00")

    response = analyze_meal_response(readings, eaten_at, heart_rate)

    assert response.readings_count == 4
    assert response.baseline == 110.0
    assert response.baseline_time == "12:10"
    assert response.peak == 135.0
    assert response.peak_time == "12:40"
    assert response.rise == 25.0
    assert response.minutes_to_peak == 40.0
    assert response.heart_rate_at_meal == 81.0
    assert response.to_dict()['rise_mg_dl'] == 25.0


def test_meal_response_without_known_levels() -> None:
    readings = _glucose([("2023-05-01 12:10:00", "High")])

    response = analyze_meal_response(readings, meal_timestamp("2023-05-01", "12:00"))

    assert response.readings_count == 1
    assert response.baseline is None
    assert response.peak is None
    assert response.rise is None
    assert response.heart_rate_at_meal is None
