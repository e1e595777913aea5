"""
Helpers for reading Streamlit ``on_select`` chart events.

Streamlit returns a dict-like state of the form
``{"selection": {"points": [...], "box": [...], "lasso": [...]}}``.
"""

from typing import Any, List, Mapping, Optional, Tuple

import pandas as pd


def _selection(event: Any) -> Mapping:
    if event is None:
        return {}
    if isinstance(event, Mapping):
        return event.get('selection') or {}
    return getattr(event, 'selection', None) or {}


def selected_points(event: Any) -> List[Mapping]:
    """All clicked or box-selected points."""
    return list(_selection(event).get('points') or [])


def clicked_x(event: Any) -> Optional[Any]:
    """x value of the first selected point (e.g. the day of a clicked bar)."""
    points = selected_points(event)
    if not points:
        return None
    return points[0].get('x')


def clicked_point_index(event: Any, curve_number: int = 0) -> Optional[int]:
    """Row position of the first selected point on one trace."""
    for point in selected_points(event):
        if point.get('curve_number', 0) != curve_number:
            continue
        index = point.get('point_index', point.get('point_number'))
        if index is not None:
            return int(index)
    return None


def _as_timestamp(x: Any) -> pd.Timestamp:
    # Date axes report either date strings or epoch milliseconds
    if isinstance(x, (int, float)):
        return pd.Timestamp(x, unit='ms')
    return pd.Timestamp(x)


def selected_x_range(event: Any) -> Optional[Tuple[pd.Timestamp, pd.Timestamp]]:
    """(start, end) of the first horizontal box selection, in time order."""
    for box in _selection(event).get('box') or []:
        xs = box.get('x') or []
        if len(xs) >= 2:
            start, end = sorted(_as_timestamp(x) for x in xs[:2])
            return start, end
    return None
