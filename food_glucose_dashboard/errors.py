"""Exception types raised by the dashboard core."""

from typing import Optional


class DashboardError(Exception):
    """Base class for dashboard errors."""


class DataLoadError(DashboardError):
    """One of the input sources could not be loaded.

    Fatal for initialization: no partial dataset is ever returned.
    """

    def __init__(self, source: str, cause: Optional[BaseException] = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load {source} data"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class NoGlucoseDataError(DashboardError):
    """No glucose readings fall inside the window around a selected meal."""

    def __init__(self, day: str, meal_time: str, meal_name: str):
        self.day = day
        self.meal_time = meal_time
        self.meal_name = meal_name
        super().__init__("No glucose data available for this meal time.")


class InvalidTransitionError(DashboardError):
    """A navigation event was dispatched from a state that does not accept it."""
