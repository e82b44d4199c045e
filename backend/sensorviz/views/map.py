"""
Map view adapter.

The map is driven through a small capability interface (MapCanvas): draw a
polyline, place clickable markers, mark one point as selected, and move the
viewport. Any mapping library that offers these operations can sit behind
it. GeoJSONCanvas is the implementation served to the browser: it records
the drawn layers as a GeoJSON FeatureCollection that the frontend hands to
its map widget.
"""

import logging
from functools import partial
from typing import Callable, Optional, Protocol

from sensorviz.models.record import SensorRecord
from sensorviz.models.track import Bounds, TrackGeometry
from sensorviz.services.selection import SelectionCoordinator
from sensorviz.utils.timestamps import format_date_time


logger = logging.getLogger(__name__)

Coordinate = tuple[float, float]  # (lat, lon)


class MapCanvas(Protocol):
    """Capabilities the map adapter needs from a mapping library."""

    def clear(self) -> None:
        ...

    def draw_polyline(self, coordinates: list[Coordinate]) -> None:
        ...

    def add_marker(
        self,
        coordinate: Coordinate,
        popup: str,
        on_click: Callable[[], None],
    ) -> int:
        ...

    def set_selected(self, coordinate: Coordinate) -> None:
        ...

    def clear_selected(self) -> None:
        ...

    def fit_bounds(self, bounds: Bounds) -> None:
        ...

    def pan_to(self, coordinate: Coordinate) -> None:
        ...


class GeoJSONCanvas:
    """MapCanvas that renders into a GeoJSON FeatureCollection."""

    DEFAULT_CENTER: Coordinate = (0.0, 0.0)
    DEFAULT_ZOOM = 2

    def __init__(self):
        self._track: Optional[list[Coordinate]] = None
        self._markers: list[dict] = []
        self._callbacks: list[Callable[[], None]] = []
        self._selected: Optional[Coordinate] = None
        self.center: Coordinate = self.DEFAULT_CENTER
        self.zoom: Optional[int] = self.DEFAULT_ZOOM
        self.bounds: Optional[Bounds] = None

    def clear(self) -> None:
        """Remove all layers and the fitted bounds. The center and zoom stay where they are."""
        self._track = None
        self._markers = []
        self._callbacks = []
        self._selected = None
        self.bounds = None

    def draw_polyline(self, coordinates: list[Coordinate]) -> None:
        self._track = list(coordinates)

    def add_marker(
        self,
        coordinate: Coordinate,
        popup: str,
        on_click: Callable[[], None],
    ) -> int:
        marker_id = len(self._markers)
        self._markers.append({"coordinate": coordinate, "popup": popup})
        self._callbacks.append(on_click)
        return marker_id

    def set_selected(self, coordinate: Coordinate) -> None:
        self._selected = coordinate

    def clear_selected(self) -> None:
        self._selected = None

    def fit_bounds(self, bounds: Bounds) -> None:
        self.bounds = bounds
        self.center = bounds.center
        self.zoom = None  # frontend derives zoom from bounds

    def pan_to(self, coordinate: Coordinate) -> None:
        self.center = coordinate

    @property
    def marker_count(self) -> int:
        return len(self._markers)

    @property
    def selected(self) -> Optional[Coordinate]:
        return self._selected

    def click(self, marker_id: int) -> None:
        """Dispatch a marker click. Raises KeyError for an unknown marker."""
        if marker_id < 0 or marker_id >= len(self._callbacks):
            raise KeyError(marker_id)
        self._callbacks[marker_id]()

    def to_geojson(self) -> dict:
        """Current layers as a FeatureCollection (coordinates are [lon, lat])."""
        features = []

        if self._track:
            features.append({
                "type": "Feature",
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[lon, lat] for lat, lon in self._track],
                },
                "properties": {"layer": "track", "pointCount": len(self._track)},
            })

        for marker_id, marker in enumerate(self._markers):
            lat, lon = marker["coordinate"]
            features.append({
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [lon, lat]},
                "properties": {
                    "layer": "marker",
                    "markerId": marker_id,
                    "popup": marker["popup"],
                },
            })

        if self._selected is not None:
            lat, lon = self._selected
            features.append({
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [lon, lat]},
                "properties": {"layer": "selected"},
            })

        return {"type": "FeatureCollection", "features": features}


class MapAdapter:
    """
    Renders a track onto a MapCanvas and keeps its selected marker in sync
    with the shared selection.

    Clicking a marker writes that fix's timestamp into the selection. Any
    selection change (from either view) moves the selected marker and pans
    to it; a timestamp with no matching fix shows no selected marker.
    """

    def __init__(self, canvas: MapCanvas, selection: SelectionCoordinator):
        self.canvas = canvas
        self._selection = selection
        self._geometry = TrackGeometry()
        self._marker_timestamps: list[str] = []
        self._unsubscribe = selection.subscribe(self.render_selection)

    @property
    def geometry(self) -> TrackGeometry:
        return self._geometry

    def render(self, geometry: TrackGeometry) -> None:
        """Redraw the track and markers for a new geometry."""
        self._geometry = geometry
        self._marker_timestamps = []
        self.canvas.clear()

        if not geometry.valid_fixes:
            logger.debug("No valid GPS fixes, map left empty")
            return

        self.canvas.draw_polyline(geometry.coordinates)
        for fix, distance_km in zip(geometry.valid_fixes, geometry.cumulative_km):
            self.canvas.add_marker(
                fix.coordinate,
                popup=marker_popup(fix, distance_km),
                on_click=partial(self._selection.select, fix.timestamp),
            )
            self._marker_timestamps.append(fix.timestamp)

        if geometry.bounds is not None:
            self.canvas.fit_bounds(geometry.bounds)

        self.render_selection(self._selection.current())

    def render_selection(self, timestamp: Optional[str]) -> None:
        self.canvas.clear_selected()
        idx = self._geometry.find_fix(timestamp)
        if idx is None:
            return
        coordinate = self._geometry.valid_fixes[idx].coordinate
        self.canvas.set_selected(coordinate)
        self.canvas.pan_to(coordinate)

    def marker_timestamp(self, marker_id: int) -> Optional[str]:
        if 0 <= marker_id < len(self._marker_timestamps):
            return self._marker_timestamps[marker_id]
        return None

    def detach(self) -> None:
        """Stop following the selection."""
        self._unsubscribe()


def marker_popup(fix: SensorRecord, distance_km: float) -> str:
    """Popup text for one fix marker."""
    return "\n".join([
        f"Time: {format_date_time(fix.timestamp)}",
        f"Position: {fix.lat:.6f}, {fix.lon:.6f}",
        f"Altitude: {fix.alt:.1f}m",
        f"Satellites: {fix.sats}",
        f"Accelerometer: X: {fix.accX:.2f}, Y: {fix.accY:.2f}, Z: {fix.accZ:.2f}",
        f"Gyroscope: X: {fix.gyroX:.2f}, Y: {fix.gyroY:.2f}, Z: {fix.gyroZ:.2f}",
        f"Distance: {distance_km:.2f} km",
    ])
