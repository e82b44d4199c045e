"""
Canonicalizer for raw CSV tables.

Coerces string cells into typed SensorRecords. Coercion is permissive on
purpose: a numeric cell yields its leading number, or 0 when it has none.
Nothing here raises for bad cell contents.
"""

import numpy as np
import pandas as pd

from sensorviz.models.raw import RawTable
from sensorviz.models.record import (
    FLOAT_FIELDS,
    INT_FIELDS,
    TIMESTAMP_FIELD,
    SensorRecord,
)


# Leading numeric prefix, e.g. "12.5abc" -> "12.5", "1e3x" -> "1e3"
FLOAT_PREFIX = r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
INT_PREFIX = r"^([+-]?\d+)"
MAX_INT = np.iinfo(np.int32).max


def canonicalize_table(table: RawTable) -> list[SensorRecord]:
    """Convert accepted raw rows into records, preserving row order."""
    if not table.rows:
        return []

    n_rows = len(table.rows)
    cells = pd.DataFrame(table.rows, dtype=str)
    columns = table.column_index

    timestamp_col = columns.get(TIMESTAMP_FIELD)
    if timestamp_col is None:
        timestamps = [""] * n_rows
    else:
        timestamps = cells[timestamp_col].tolist()

    floats = {
        name: _coerce_float(_column(cells, columns, name))
        for name in FLOAT_FIELDS
    }
    ints = {
        name: _coerce_int(_column(cells, columns, name))
        for name in INT_FIELDS
    }

    records = []
    for i in range(n_rows):
        values = {name: float(arr[i]) for name, arr in floats.items()}
        values.update({name: int(arr[i]) for name, arr in ints.items()})
        records.append(SensorRecord(timestamp=timestamps[i], **values))
    return records


def _column(cells: pd.DataFrame, columns: dict[str, int], name: str) -> pd.Series:
    idx = columns.get(name)
    if idx is None:
        return pd.Series([""] * len(cells), dtype=str)
    return cells[idx]


def _coerce_float(values: pd.Series) -> np.ndarray:
    """Leading float of each cell, 0.0 where there is none or it is not finite."""
    prefix = values.str.extract(FLOAT_PREFIX, expand=False)
    numbers = pd.to_numeric(prefix, errors="coerce").to_numpy(dtype=np.float64)
    return np.where(np.isfinite(numbers), numbers, 0.0)


def _coerce_int(values: pd.Series) -> np.ndarray:
    """Leading integer of each cell, 0 where there is none. Clamped to [0, 2**31 - 1]."""
    prefix = values.str.extract(INT_PREFIX, expand=False)
    numbers = pd.to_numeric(prefix, errors="coerce").to_numpy(dtype=np.float64)
    numbers = np.where(np.isfinite(numbers), numbers, 0.0)
    return np.clip(numbers, 0, MAX_INT).astype(np.int64)
