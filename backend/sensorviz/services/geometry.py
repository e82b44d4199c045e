"""
Track geometry and dataset summary.

Both functions are pure: they never modify the records they are given and
return identical results for identical input.
"""

import logging
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from sensorviz.models.record import SensorRecord
from sensorviz.models.track import Bounds, DatasetSummary, TrackGeometry
from sensorviz.utils.coordinates import bounding_box, track_legs


logger = logging.getLogger(__name__)


def compute_geometry(records: Sequence[SensorRecord]) -> TrackGeometry:
    """
    Derive the GPS track from a dataset.

    Fixes where either coordinate is 0 are excluded. Distance is the sum of
    haversine legs between consecutive fixes, accumulated in order so that
    appending a fix never lowers the total.
    """
    fixes = tuple(record for record in records if record.has_fix)
    if not fixes:
        return TrackGeometry()

    lat = np.array([fix.lat for fix in fixes], dtype=np.float64)
    lon = np.array([fix.lon for fix in fixes], dtype=np.float64)

    cumulative = np.concatenate(([0.0], np.cumsum(track_legs(lat, lon))))

    return TrackGeometry(
        valid_fixes=fixes,
        distance_km=round(float(cumulative[-1]), 2),
        bounds=Bounds(*bounding_box(lat, lon)),
        cumulative_km=tuple(float(d) for d in cumulative),
    )


def summarize(
    records: Sequence[SensorRecord],
    geometry: TrackGeometry,
    filename: Optional[str] = None,
) -> DatasetSummary:
    """Build summary statistics for a dataset and its geometry."""
    if not records:
        return DatasetSummary(
            filename=filename,
            sample_count=0,
            fix_count=0,
            distance_km=0.0,
            first_timestamp=None,
            last_timestamp=None,
            duration_s=None,
            max_sats=0,
            bounds=None,
        )

    return DatasetSummary(
        filename=filename,
        sample_count=len(records),
        fix_count=len(geometry.valid_fixes),
        distance_km=geometry.distance_km,
        first_timestamp=records[0].timestamp,
        last_timestamp=records[-1].timestamp,
        duration_s=_duration_s([record.timestamp for record in records]),
        max_sats=max(record.sats for record in records),
        bounds=geometry.bounds,
    )


def _duration_s(timestamps: list[str]) -> Optional[float]:
    """Span between earliest and latest parseable timestamp, in seconds."""
    times = pd.to_datetime(
        pd.Series(timestamps, dtype=object),
        errors="coerce",
        utc=True,
        format="ISO8601",
    ).dropna()
    if times.empty:
        logger.debug("No ISO-8601 timestamps in dataset, duration unknown")
        return None
    return float((times.max() - times.min()).total_seconds())
