"""
Shared loading logic for timestamped CSV exports.

Every loader turns a tabular source into a DataFrame with a parsed
timestamp plus the derived calendar day and clock time. Individual bad
values are coerced, never fatal: no row is dropped.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from food_glucose_dashboard.records import DAY_FORMAT, TIME_FORMAT, TIME_SCHEMA

logger = logging.getLogger(__name__)

TabularSource = Union[str, Path, Any, pd.DataFrame, Iterable[Mapping[str, Any]]]


def _wall_clock(value: Any) -> pd.Timestamp:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return pd.NaT
    ts = pd.to_datetime(value, errors='coerce')
    if ts is pd.NaT:
        return pd.NaT
    return ts.tz_localize(None) if ts.tzinfo is not None else ts


def parse_timestamps(values: pd.Series) -> pd.Series:
    """Parse ISO-like timestamps into naive wall-clock times.

    A UTC offset is dropped and the local time it qualifies is kept, so
    ``12:00-07:00`` becomes 12:00. Unparseable values become NaT.
    """
    try:
        parsed = pd.to_datetime(values, errors='coerce', format='mixed')
    except ValueError:
        # Offsets differ between rows (e.g. across a DST change)
        parsed = None

    if parsed is not None:
        if isinstance(parsed.dtype, pd.DatetimeTZDtype):
            return parsed.dt.tz_localize(None)
        if pd.api.types.is_datetime64_dtype(parsed.dtype):
            return parsed

    return pd.to_datetime(values.map(_wall_clock))


def coerce_numeric(
    raw: pd.DataFrame,
    candidates: List[str],
    default: float = np.nan,
) -> pd.Series:
    """Coerce the first matching column to float.

    Absent columns and non-numeric values yield ``default``.
    """
    column = find_column(raw, candidates)
    if column is None:
        return pd.Series(default, index=raw.index, dtype=float)
    values = pd.to_numeric(raw[column], errors='coerce').astype(float)
    if not np.isnan(default):
        values = values.fillna(default)
    return values


def find_column(df: pd.DataFrame, candidates: List[str]) -> Optional[str]:
    """Find matching column name from candidates.

    Args:
        df: DataFrame to search.
        candidates: List of possible column names.

    Returns:
        Matching column name or None.
    """
    for candidate in candidates:
        if candidate in df.columns:
            return candidate
    return None


class TimestampedLoader:
    """Base loader for one timestamped export.

    Subclasses set SOURCE_NAME and COLUMNS and fill in the measurement
    fields in ``_normalize_fields``.
    """

    SOURCE_NAME = "timestamped"

    TIMESTAMP_COLUMNS = [
        'datetime',
        'Timestamp (YYYY-MM-DDThh:mm:ss)',
        'Timestamp',
        'DateTime',
    ]

    COLUMNS: List[str] = TIME_SCHEMA

    def __init__(self, source: TabularSource):
        """Initialize loader with a tabular source.

        Args:
            source: CSV path, file-like object, DataFrame, or iterable of
                string-keyed rows.
        """
        self.source = source

    def _read(self) -> pd.DataFrame:
        source = self.source
        if isinstance(source, pd.DataFrame):
            raw = source.copy()
        elif isinstance(source, (str, Path)) or hasattr(source, 'read'):
            # Everything as text so coercion happens in one place
            raw = pd.read_csv(source, encoding='utf-8-sig', dtype=str, keep_default_na=False)
        else:
            raw = pd.DataFrame.from_records(list(source))
        raw.columns = [str(c).strip() for c in raw.columns]
        return raw.reset_index(drop=True)

    def load(self) -> pd.DataFrame:
        """Load and normalize the source.

        Returns:
            DataFrame with the loader's COLUMNS, one row per input row.

        Raises:
            ValueError: If the source has columns but none holds timestamps.
        """
        raw = self._read()

        if len(raw.columns) == 0:
            # No rows at all: normalize an empty table with the same schema
            raw = pd.DataFrame({self.TIMESTAMP_COLUMNS[0]: pd.Series(dtype=str)})

        timestamp_col = find_column(raw, self.TIMESTAMP_COLUMNS)
        if timestamp_col is None:
            raise ValueError(
                f"Could not find a timestamp column in {self.SOURCE_NAME} data. "
                f"Found columns: {list(raw.columns)}"
            )

        df = pd.DataFrame(index=raw.index)
        df['timestamp'] = parse_timestamps(raw[timestamp_col])
        df['day'] = df['timestamp'].dt.strftime(DAY_FORMAT)
        df['time'] = df['timestamp'].dt.strftime(TIME_FORMAT)

        unparsed = int(df['timestamp'].isna().sum())
        if unparsed:
            logger.warning(
                "%d %s rows have an unparseable timestamp", unparsed, self.SOURCE_NAME
            )

        self._normalize_fields(raw, df)

        normalized = df[self.COLUMNS]
        logger.info("Loaded %d %s rows", len(normalized), self.SOURCE_NAME)
        return normalized

    def _normalize_fields(self, raw: pd.DataFrame, df: pd.DataFrame) -> None:
        raise NotImplementedError
