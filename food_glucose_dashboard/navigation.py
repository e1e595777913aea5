"""
Drill-down navigation between the calendar, meal and glucose views.

The navigator owns a stack of immutable view objects. Selecting a day or
a meal pushes a new view, Back pops one, and brushing replaces the glucose
view on top with a copy carrying the selection summary. The loaded data
is never modified: every view is built from filtered copies.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import ClassVar, List, Optional, Tuple, Union

import pandas as pd

from food_glucose_dashboard.analyzers.aggregation import aggregate_by_day
from food_glucose_dashboard.analyzers.glucose import (
    analyze_meal_response,
    clock_timestamps,
    meal_timestamp,
    meal_window,
    readings_in_window,
    summarize_selection,
)
from food_glucose_dashboard.config import NavigationSettings
from food_glucose_dashboard.errors import InvalidTransitionError, NoGlucoseDataError
from food_glucose_dashboard.loaders.dataset import DashboardData
from food_glucose_dashboard.metrics.daily_aggregate import DailyAggregate
from food_glucose_dashboard.metrics.meal_response import MealResponse
from food_glucose_dashboard.metrics.selection_summary import SelectionSummary
from food_glucose_dashboard.records import FoodLogRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarView:
    """One aggregate per logged day."""
    aggregates: Tuple[DailyAggregate, ...]
    nutrient: str

    name: ClassVar[str] = "calendar"

    @property
    def days(self) -> List[str]:
        return [a.day for a in self.aggregates]


@dataclass(frozen=True)
class MealView:
    """Food log entries for one day (possibly none)."""
    day: str
    meals: pd.DataFrame = field(compare=False, repr=False)

    name: ClassVar[str] = "meal"

    @property
    def is_empty(self) -> bool:
        return self.meals.empty

    def meal_at(self, position: int) -> FoodLogRecord:
        """Record for the meal at a row position (e.g. a clicked point)."""
        return FoodLogRecord.from_row(self.meals.iloc[position])


@dataclass(frozen=True)
class GlucoseView:
    """Glucose (and heart rate) readings in the window around one meal."""
    day: str
    meal_time: str
    meal_name: Optional[str]
    meal_timestamp: pd.Timestamp
    window_start: pd.Timestamp
    window_end: pd.Timestamp
    glucose: pd.DataFrame = field(compare=False, repr=False)
    heart_rate: pd.DataFrame = field(compare=False, repr=False)
    response: Optional[MealResponse] = None
    selection: Optional[SelectionSummary] = None

    name: ClassVar[str] = "glucose"

    def selected_mask(self) -> pd.Series:
        """Boolean mask over ``glucose`` for readings inside the brush."""
        if self.selection is None:
            return pd.Series(False, index=self.glucose.index)
        clock = clock_timestamps(self.glucose)
        return (clock >= self.selection.start) & (clock <= self.selection.end)


View = Union[CalendarView, MealView, GlucoseView]


class DrilldownNavigator:
    """State machine driving the three drill-down views.

    Calendar --select_day--> Meal --select_meal--> Glucose, with back()
    returning exactly one level. Each transition returns the new current
    view; callers re-render from it.
    """

    def __init__(
        self,
        data: DashboardData,
        nutrient: str = "carb",
        window_minutes: int = 60,
        window_inclusive: bool = False,
    ):
        """Initialize navigator on the calendar view.

        Args:
            data: Loaded dashboard data.
            nutrient: Secondary nutrient tracked in the calendar.
            window_minutes: Half-width of the glucose window around a meal.
            window_inclusive: Keep readings exactly on the window boundary.
        """
        self.data = data
        self.nutrient = nutrient
        self.window_minutes = window_minutes
        self.window_inclusive = window_inclusive

        calendar = CalendarView(
            aggregates=tuple(aggregate_by_day(data.food_log, nutrient)),
            nutrient=nutrient,
        )
        self._stack: List[View] = [calendar]

    @classmethod
    def from_settings(
        cls,
        data: DashboardData,
        settings: NavigationSettings,
    ) -> 'DrilldownNavigator':
        return cls(
            data,
            nutrient=settings.secondary_nutrient,
            window_minutes=settings.glucose_window_minutes,
            window_inclusive=settings.window_inclusive,
        )

    @property
    def current(self) -> View:
        return self._stack[-1]

    @property
    def state(self) -> str:
        return self.current.name

    @property
    def calendar(self) -> CalendarView:
        return self._stack[0]

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def can_go_back(self) -> bool:
        return len(self._stack) > 1

    def _require(self, view_type: type, event: str) -> None:
        if not isinstance(self.current, view_type):
            raise InvalidTransitionError(
                f"Cannot {event} from the {self.state} view"
            )

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def select_day(self, day: str) -> MealView:
        """Drill into the meals logged on ``day``."""
        self._require(CalendarView, "select a day")

        food = self.data.food_log
        view = MealView(day=day, meals=food[food['day'] == day])
        self._stack.append(view)

        logger.info("Calendar -> meals for %s (%d entries)", day, len(view.meals))
        return view

    def select_meal(self, meal: FoodLogRecord) -> GlucoseView:
        """Drill into the glucose response around ``meal``.

        Raises:
            NoGlucoseDataError: If no reading falls in the window. The
                navigator stays on the meal view.
            InvalidTransitionError: If not on a meal view, or the meal has
                no timestamp.
        """
        self._require(MealView, "select a meal")
        if meal.day is None or meal.time is None:
            raise InvalidTransitionError("Cannot select a meal without a timestamp")

        eaten_at = meal_timestamp(meal.day, meal.time)
        start, end = meal_window(eaten_at, self.window_minutes)

        glucose = readings_in_window(
            self.data.glucose, meal.day, start, end, inclusive=self.window_inclusive
        )
        if glucose.empty:
            logger.warning(
                "No glucose readings within %d minutes of %s at %s %s",
                self.window_minutes, meal.food, meal.day, meal.time,
            )
            raise NoGlucoseDataError(meal.day, meal.time, meal.food)

        heart_rate = readings_in_window(
            self.data.heart_rate, meal.day, start, end, inclusive=self.window_inclusive
        )

        view = GlucoseView(
            day=meal.day,
            meal_time=meal.time,
            meal_name=meal.food,
            meal_timestamp=eaten_at,
            window_start=start,
            window_end=end,
            glucose=glucose,
            heart_rate=heart_rate,
            response=analyze_meal_response(glucose, eaten_at, heart_rate),
        )
        self._stack.append(view)

        logger.info(
            "Meals -> glucose for %s at %s %s (%d readings)",
            meal.food, meal.day, meal.time, len(glucose),
        )
        return view

    def back(self) -> View:
        """Return to the parent view, discarding any brush selection.

        On the calendar view this is a no-op.
        """
        if not self.can_go_back:
            logger.debug("Back pressed on the calendar view; ignoring")
            return self.current

        left = self._stack.pop()
        logger.info("%s -> %s", left.name, self.state)
        return self.current

    def reset(self) -> CalendarView:
        """Return straight to the calendar."""
        del self._stack[1:]
        return self.calendar

    # =========================================================================
    # BRUSHING
    # =========================================================================

    def brush(self, x0: pd.Timestamp, x1: pd.Timestamp) -> GlucoseView:
        """Summarize the readings in the inclusive range [x0, x1]."""
        self._require(GlucoseView, "brush")

        view = self.current
        summary = summarize_selection(view.glucose, x0, x1)
        brushed = replace(view, selection=summary)
        self._stack[-1] = brushed

        logger.debug(
            "Brushed %s to %s: %d readings", summary.start, summary.end, summary.count
        )
        return brushed

    def clear_brush(self) -> GlucoseView:
        """Remove the selection summary from the glucose view."""
        self._require(GlucoseView, "clear a brush")

        cleared = replace(self.current, selection=None)
        self._stack[-1] = cleared
        return cleared
