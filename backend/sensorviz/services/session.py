"""
Sensor session - owns the loaded dataset.

The session is the single source of truth: the current records, the track
geometry derived from them, the shared selection and the map view. The
dataset is only ever replaced wholesale (new upload or clear), and every
replacement clears the selection.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from sensorviz.models.record import SensorRecord
from sensorviz.models.track import DatasetSummary, TrackGeometry
from sensorviz.services.csv_parser import read_csv_file
from sensorviz.services.geometry import compute_geometry, summarize
from sensorviz.services.selection import SelectionCoordinator
from sensorviz.views.chart import ChartAdapter
from sensorviz.views.map import GeoJSONCanvas, MapAdapter


logger = logging.getLogger(__name__)


class SensorSession:
    """
    In-memory session holding one dataset.

    Loads are tagged with a generation number. A load that finishes after a
    newer load has started is discarded, so a slow upload can never
    overwrite a more recent one.
    """

    def __init__(self):
        self.selection = SelectionCoordinator()
        self.chart_view = ChartAdapter(self.selection)
        self.map_canvas = GeoJSONCanvas()
        self.map_view = MapAdapter(self.map_canvas, self.selection)

        self._records: tuple[SensorRecord, ...] = ()
        self._geometry = TrackGeometry()
        self._filename: Optional[str] = None
        self._generation = 0

    @property
    def records(self) -> tuple[SensorRecord, ...]:
        return self._records

    @property
    def geometry(self) -> TrackGeometry:
        return self._geometry

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    @property
    def generation(self) -> int:
        return self._generation

    def summary(self) -> DatasetSummary:
        return summarize(self._records, self._geometry, self._filename)

    def find_record(self, timestamp: Optional[str]) -> Optional[SensorRecord]:
        """First record with this timestamp, or None."""
        if timestamp is None:
            return None
        for record in self._records:
            if record.timestamp == timestamp:
                return record
        return None

    def begin_load(self) -> int:
        """Start a load and return its generation tag."""
        self._generation += 1
        return self._generation

    def complete_load(
        self,
        generation: int,
        filename: Optional[str],
        records: Sequence[SensorRecord],
    ) -> bool:
        """
        Install the records of a finished load.

        Returns False (and changes nothing) if a newer load was started
        after this one.
        """
        if generation != self._generation:
            logger.info(
                f"Discarding stale load of {filename} "
                f"(generation {generation}, latest {self._generation})"
            )
            return False

        self._replace(tuple(records), filename)
        logger.info(f"Loaded {len(self._records)} samples from {filename}")
        return True

    def load(self, filename: Optional[str], records: Sequence[SensorRecord]) -> None:
        """Replace the dataset immediately."""
        self.complete_load(self.begin_load(), filename, records)

    def load_file(self, filepath: Path) -> int:
        """Read a CSV log from disk into the session. Returns the sample count."""
        generation = self.begin_load()
        records = read_csv_file(filepath)
        self.complete_load(generation, filepath.name, records)
        return len(records)

    def clear(self) -> None:
        """Empty the dataset. Any load in flight is superseded."""
        self._generation += 1
        self._replace((), None)
        logger.info("Dataset cleared")

    def _replace(self, records: tuple[SensorRecord, ...], filename: Optional[str]) -> None:
        self._records = records
        self._filename = filename
        self._geometry = compute_geometry(records)
        self.selection.clear()
        self.map_view.render(self._geometry)


# Global session instance (set up by app initialization)
_session: Optional[SensorSession] = None


def get_session() -> SensorSession:
    """Get the global session instance."""
    global _session
    if _session is None:
        _session = SensorSession()
    return _session


def init_session(csv_file: Optional[Path] = None) -> SensorSession:
    """Create a fresh global session, optionally preloaded from a CSV file."""
    global _session
    _session = SensorSession()
    if csv_file is not None:
        _session.load_file(csv_file)
    return _session
