"""
Nearest-timestamp matching between independently sampled series.
"""

from typing import Optional

import pandas as pd


def find_nearest(
    records: pd.DataFrame,
    target: pd.Timestamp,
    column: str = 'timestamp',
) -> Optional[pd.Series]:
    """Return the row whose timestamp is closest to ``target``.

    Ties go to the row that comes first in the frame's row order, so the
    result is the same on every call with the same input. Rows with a
    missing timestamp are never matched.

    Args:
        records: Frame with a datetime column.
        target: Instant to match.
        column: Name of the datetime column.

    Returns:
        The matching row, or None when there is nothing to match.
    """
    if records.empty:
        return None

    differences = (records[column] - pd.Timestamp(target)).abs().dropna()
    if differences.empty:
        return None

    # idxmin keeps the first occurrence of the minimum
    return records.loc[differences.idxmin()]
