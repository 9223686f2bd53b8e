"""
coercion.py — Typed columns for facts query results.

Amounts, decimals and fact counts become numeric; period boundaries become
calendar dates. Anything unparseable becomes NaN/NaT instead of raising.
Other columns stay as strings.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

NUMERIC_COLUMNS = ("amount", "decimals", "fact")
DATE_COLUMNS = ("periodStart", "periodEnd", "periodInstant")
DATE_FORMAT = "%Y-%m-%d"


def coerce_fact_types(
    frame: pd.DataFrame,
    numeric_columns: Sequence[str] = NUMERIC_COLUMNS,
    date_columns: Sequence[str] = DATE_COLUMNS,
) -> pd.DataFrame:
    """Return a copy of `frame` with known numeric and date columns converted."""
    if frame.empty and not len(frame.columns):
        return frame

    frame = frame.copy()
    for column in numeric_columns:
        if column in frame.columns:
            frame[column] = pd.to_numeric(frame[column], errors="coerce")
    for column in date_columns:
        if column in frame.columns:
            # Only the leading YYYY-MM-DD part is read
            values = frame[column].map(lambda v: v[:10] if isinstance(v, str) else v)
            frame[column] = pd.to_datetime(values, errors="coerce", format=DATE_FORMAT)
    return frame
