"""Shared test fixtures."""

import io

import pytest

from food_glucose_dashboard.loaders import load_dashboard_data
from food_glucose_dashboard.navigation import DrilldownNavigator

FOOD_LOG_CSV = """\
datetime,logged_food,calorie,sugar,total_carb,dietary_fiber,protein,total_fat
2023-05-01 08:00:00,Oatmeal,300,5,25,4,10,6
2023-05-01 12:00:00,Burrito,500,2,12.5,6,25,20
2023-05-02 19:30:00,Water,0,0,0,0,0,0
"""

GLUCOSE_CSV = """\
datetime,Glucose Value (mg/dL)
2023-05-01 11:00:00,90
2023-05-01 11:30:00,100
2023-05-01 12:10:00,110
2023-05-01 12:40:00,120
2023-05-01 13:30:00,130
"""

HEART_RATE_CSV = """\
datetime,hr
2023-05-01 11:58:00,72
2023-05-01 12:20:00,n/a
2023-05-01 12:30:00,88
"""


@pytest.fixture
def food_csv() -> io.StringIO:
    return io.StringIO(FOOD_LOG_CSV)


@pytest.fixture
def glucose_csv() -> io.StringIO:
    return io.StringIO(GLUCOSE_CSV)


@pytest.fixture
def heart_rate_csv() -> io.StringIO:
    return io.StringIO(HEART_RATE_CSV)


@pytest.fixture
def dashboard_data(food_csv, glucose_csv, heart_rate_csv):
    return load_dashboard_data(food_csv, glucose_csv, heart_rate_csv)


@pytest.fixture
def navigator(dashboard_data) -> DrilldownNavigator:
    return DrilldownNavigator(dashboard_data)


@pytest.fixture
def glucose_navigator(navigator) -> DrilldownNavigator:
    """Navigator drilled down to the 12:00 burrito."""
    meals = navigator.select_day("2023-05-01")
    navigator.select_meal(meals.meal_at(1))
    return navigator
