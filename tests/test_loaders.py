"""Tests for the CSV loaders and join-all loading."""

import io
import math

import pandas as pd
import pytest

from food_glucose_dashboard.config import DataSources
from food_glucose_dashboard.errors import DataLoadError
from food_glucose_dashboard.loaders import (
    DexcomLoader,
    FoodLogLoader,
    HeartRateLoader,
    load_dashboard_data,
    load_from_config,
)
from food_glucose_dashboard.records import FOOD_LOG_SCHEMA, GLUCOSE_SCHEMA
from tests.conftest import FOOD_LOG_CSV, GLUCOSE_CSV, HEART_RATE_CSV


def test_food_log_derives_day_time_and_calories(food_csv) -> None:
    df = FoodLogLoader(food_csv).load()

    assert list(df.columns) == FOOD_LOG_SCHEMA
    assert list(df['day']) == ["2023-05-01", "2023-05-01", "2023-05-02"]
    assert list(df['time']) == ["08:00", "12:00", "19:30"]
    assert list(df['food']) == ["Oatmeal", "Burrito", "Water"]
    assert list(df['carb_calories']) == [100.0, 50.0, 0.0]
    assert df.loc[1, 'fat_calories'] == 180.0


def test_food_log_time_drops_seconds() -> None:
    df = FoodLogLoader([{"datetime": "2023-05-01T12:34:56", "logged_food": "Tea"}]).load()

    assert df.loc[0, 'day'] == "2023-05-01"
    assert df.loc[0, 'time'] == "12:34"


def test_food_log_coerces_bad_nutrients_to_zero() -> None:
    rows = [
        {"datetime": "2023-05-01 08:00", "logged_food": "Toast", "calorie": "abc", "total_carb": "20"},
        {"datetime": "2023-05-01 09:00", "logged_food": "Jam", "calorie": "", "total_carb": None},
    ]

    df = FoodLogLoader(rows).load()

    assert list(df['calorie']) == [0.0, 0.0]
    assert list(df['carbs']) == [20.0, 0.0]
    assert list(df['carb_calories']) == [80.0, 0.0]
    # Absent columns default to 0 as well
    assert list(df['sugar']) == [0.0, 0.0]
    assert list(df['fat_calories']) == [0.0, 0.0]


def test_unparseable_timestamp_keeps_row() -> None:
    csv = io.StringIO(
        "datetime,Glucose Value (mg/dL)\n"
        "2023-05-01 11:00:00,95\n"
        "not a date,100\n"
        "2023-05-01 11:10:00,Low\n"
    )

    df = DexcomLoader(csv).load()

    assert len(df) == 3
    assert pd.isna(df.loc[1, 'timestamp'])
    assert pd.isna(df.loc[1, 'day'])
    assert df.loc[1, 'level'] == 100.0
    assert math.isnan(df.loc[2, 'level'])


def test_dexcom_non_egv_events_have_unknown_level() -> None:
    rows = [
        {"Timestamp (YYYY-MM-DDThh:mm:ss)": "2023-05-01T11:00:00", "Event Type": "EGV", "Glucose Value (mg/dL)": "95"},
        {"Timestamp (YYYY-MM-DDThh:mm:ss)": "2023-05-01T11:02:00", "Event Type": "Calibration", "Glucose Value (mg/dL)": "99"},
    ]

    df = DexcomLoader(rows).load()

    assert list(df.columns) == GLUCOSE_SCHEMA
    assert df.loc[0, 'level'] == 95.0
    assert math.isnan(df.loc[1, 'level'])


def test_heart_rate_unknown_values_are_nan(heart_rate_csv) -> None:
    df = HeartRateLoader(heart_rate_csv).load()

    assert len(df) == 3
    assert df.loc[0, 'heart_rate'] == 72.0
    assert math.isnan(df.loc[1, 'heart_rate'])


def test_missing_glucose_column_gives_unknown_levels() -> None:
    df = DexcomLoader([{"datetime": "2023-05-01 11:00"}]).load()

    assert math.isnan(df.loc[0, 'level'])


def test_missing_timestamp_column_raises() -> None:
    with pytest.raises(ValueError, match="timestamp column"):
        HeartRateLoader([{"time": "11:00", "hr": "70"}]).load()


def test_empty_source_loads_empty_schema() -> None:
    df = FoodLogLoader([]).load()

    assert df.empty
    assert list(df.columns) == FOOD_LOG_SCHEMA


def test_dataframe_source_is_not_modified() -> None:
    raw = pd.DataFrame({"datetime": ["2023-05-01 11:00"], "hr": ["70"]})
    before = raw.copy()

    HeartRateLoader(raw).load()

    pd.testing.assert_frame_equal(raw, before)


def test_offset_timestamps_keep_local_wall_time() -> None:
    df = DexcomLoader([
        {"datetime": "2023-05-01T12:10:00-07:00", "Glucose Value (mg/dL)": "110"},
        {"datetime": "2023-05-01T23:30:00-07:00", "Glucose Value (mg/dL)": "95"},
    ]).load()

    assert df['timestamp'].dt.tz is None
    assert list(df['day']) == ["2023-05-01", "2023-05-01"]
    assert list(df['time']) == ["12:10", "23:30"]


def test_offsets_changing_across_dst_do_not_abort_load() -> None:
    csv = io.StringIO(
        "datetime,Glucose Value (mg/dL)\n"
        "2023-03-12T01:50:00-08:00,100\n"
        "2023-03-12T03:10:00-07:00,105\n"
        "not a date,90\n"
    )

    df = DexcomLoader(csv).load()

    assert len(df) == 3
    assert df['timestamp'].dt.tz is None
    assert list(df['time'][:2]) == ["01:50", "03:10"]
    assert pd.isna(df.loc[2, 'timestamp'])


def test_generic_type_column_does_not_hide_levels() -> None:
    df = DexcomLoader([
        {"datetime": "2023-05-01 11:00", "Type": "cgm", "Glucose Value (mg/dL)": "95"},
    ]).load()

    assert df.loc[0, 'level'] == 95.0


def test_load_dashboard_data_loads_all_sources(dashboard_data) -> None:
    assert dashboard_data.summary() == {
        'food_log_rows': 3,
        'glucose_rows': 5,
        'heart_rate_rows': 3,
    }


def test_load_dashboard_data_names_failing_source() -> None:
    bad_glucose = io.StringIO("when,Glucose Value (mg/dL)\n2023-05-01,90\n")

    with pytest.raises(DataLoadError) as exc_info:
        load_dashboard_data(
            io.StringIO(FOOD_LOG_CSV),
            bad_glucose,
            io.StringIO(HEART_RATE_CSV),
        )

    assert exc_info.value.source == "glucose"
    assert str(exc_info.value).startswith("Failed to load glucose data")
    assert isinstance(exc_info.value.cause, ValueError)


def test_load_from_config_missing_file(tmp_path) -> None:
    sources = DataSources(
        food_log=str(tmp_path / "missing_food.csv"),
        glucose=str(tmp_path / "missing_glucose.csv"),
        heart_rate=str(tmp_path / "missing_hr.csv"),
    )

    with pytest.raises(DataLoadError) as exc_info:
        load_from_config(sources)

    assert exc_info.value.source == "food log"


def test_load_from_config_reads_paths(tmp_path) -> None:
    paths = {}
    for name, text in (
        ("food_log", FOOD_LOG_CSV),
        ("glucose", GLUCOSE_CSV),
        ("heart_rate", HEART_RATE_CSV),
    ):
        path = tmp_path / f"{name}.csv"
        path.write_text(text)
        paths[name] = str(path)

    data = load_from_config(DataSources(**paths))

    assert len(data.food_log) == 3
    assert len(data.glucose) == 5


def test_dashboard_data_compares_by_identity(dashboard_data) -> None:
    reloaded = load_dashboard_data(
        io.StringIO(FOOD_LOG_CSV),
        io.StringIO(GLUCOSE_CSV),
        io.StringIO(HEART_RATE_CSV),
    )

    assert dashboard_data == dashboard_data
    assert dashboard_data != reloaded
    assert len({dashboard_data, reloaded}) == 2
