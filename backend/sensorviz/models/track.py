"""
Derived track models.

Nothing here is stored independently of the dataset; every value is
recomputed from the current records by sensorviz.services.geometry.
"""

from dataclasses import dataclass
from typing import Optional

from sensorviz.models.record import SensorRecord


@dataclass(frozen=True)
class Bounds:
    """Bounding box of a set of fixes (degrees)."""

    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    @property
    def center(self) -> tuple[float, float]:
        return (
            (self.min_lat + self.max_lat) / 2.0,
            (self.min_lon + self.max_lon) / 2.0,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_lat, self.min_lon, self.max_lat, self.max_lon)


@dataclass(frozen=True)
class TrackGeometry:
    """
    Spatial track derived from a dataset.

    - valid_fixes: records with a GPS fix, in dataset order
    - distance_km: great-circle length of the track, rounded to 2 dp
    - bounds: None when there are no valid fixes
    - cumulative_km: running distance at each fix (unrounded)
    """

    valid_fixes: tuple[SensorRecord, ...] = ()
    distance_km: float = 0.0
    bounds: Optional[Bounds] = None
    cumulative_km: tuple[float, ...] = ()

    @property
    def coordinates(self) -> list[tuple[float, float]]:
        return [fix.coordinate for fix in self.valid_fixes]

    def find_fix(self, timestamp: Optional[str]) -> Optional[int]:
        """Index of the first fix with this timestamp, or None."""
        if timestamp is None:
            return None
        for idx, fix in enumerate(self.valid_fixes):
            if fix.timestamp == timestamp:
                return idx
        return None


@dataclass
class DatasetSummary:
    """Summary statistics for the loaded dataset."""

    filename: Optional[str]
    sample_count: int
    fix_count: int
    distance_km: float
    first_timestamp: Optional[str]
    last_timestamp: Optional[str]
    duration_s: Optional[float]
    max_sats: int
    bounds: Optional[Bounds]
