"""
harmonizer.py — Union-of-columns merge of flat records into a DataFrame.

Filings differ in which optional XBRL attributes they report, so two calls
(or two facts in one call) can return different key sets. Plain row stacking
would drop or misalign columns; here the column set is the union of every key
seen, in first-seen order, and missing cells are None.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd

from xbrlus.normalization.flattener import FlatRecord


def collect_columns(records: Iterable[Mapping[str, object]]) -> List[str]:
    columns: Dict[str, None] = {}
    for record in records:
        for key in record:
            columns.setdefault(key, None)
    return list(columns)


def harmonize(*record_sets: Iterable[Mapping[str, Optional[str]]]) -> pd.DataFrame:
    """
    Merge one or more record sequences into one table.

    Rows keep call order, then record order. Zero records give an empty
    DataFrame with no columns.
    """
    records = [record for record_set in record_sets for record in record_set]
    if not records:
        return pd.DataFrame()

    columns = collect_columns(records)
    rows = [[record.get(column) for column in columns] for record in records]
    return pd.DataFrame(rows, columns=columns, dtype=object)


def frame_to_records(frame: pd.DataFrame) -> List[FlatRecord]:
    """Rows of a harmonized frame as flat records, pandas missing markers mapped to None."""
    records: List[FlatRecord] = []
    for row in frame.astype(object).itertuples(index=False, name=None):
        records.append({
            column: (None if pd.isna(value) else value)
            for column, value in zip(frame.columns, row)
        })
    return records
