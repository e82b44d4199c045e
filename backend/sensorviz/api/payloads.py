"""
Plain-dict payload builders shared by the FastAPI routes and the Flask app.
"""

from typing import Optional

from sensorviz.models.record import SensorRecord
from sensorviz.models.track import Bounds
from sensorviz.services.session import SensorSession


def bounds_dict(bounds: Optional[Bounds]) -> Optional[dict]:
    if bounds is None:
        return None
    return {
        "min_lat": bounds.min_lat,
        "min_lon": bounds.min_lon,
        "max_lat": bounds.max_lat,
        "max_lon": bounds.max_lon,
    }


def record_dict(record: Optional[SensorRecord]) -> Optional[dict]:
    if record is None:
        return None
    return record.to_dict()


def upload_dict(filename: str, sample_count: int) -> dict:
    return {
        "filename": filename,
        "sample_count": sample_count,
        "message": f"Processed {sample_count} data points",
    }


def summary_dict(session: SensorSession) -> dict:
    summary = session.summary()
    return {
        "filename": summary.filename,
        "sample_count": summary.sample_count,
        "fix_count": summary.fix_count,
        "distance_km": summary.distance_km,
        "first_timestamp": summary.first_timestamp,
        "last_timestamp": summary.last_timestamp,
        "duration_s": summary.duration_s,
        "max_sats": summary.max_sats,
        "bounds": bounds_dict(summary.bounds),
    }


def track_dict(session: SensorSession) -> dict:
    geometry = session.geometry
    return {
        "valid_fixes": [fix.to_dict() for fix in geometry.valid_fixes],
        "coordinates": geometry.coordinates,
        "cumulative_km": list(geometry.cumulative_km),
        "distance_km": geometry.distance_km,
        "bounds": bounds_dict(geometry.bounds),
    }


def selection_dict(session: SensorSession) -> dict:
    timestamp = session.selection.current()
    return {
        "timestamp": timestamp,
        "record": record_dict(session.find_record(timestamp)),
    }


def chart_dict(session: SensorSession) -> dict:
    view = session.chart_view.build(session.records)
    return {
        "timestamps": view.timestamps,
        "tick_labels": view.tick_labels,
        "panels": [
            {
                "id": panel.id,
                "title": panel.title,
                "series": [
                    {
                        "key": series.key,
                        "name": series.name,
                        "color": series.color,
                        "values": series.values,
                    }
                    for series in panel.series
                ],
            }
            for panel in view.panels
        ],
        "selected_timestamp": view.selected_timestamp,
        "selected_index": view.selected_index,
        "selection_color": view.selection_color,
    }


def map_dict(session: SensorSession) -> dict:
    canvas = session.map_canvas
    return {
        "geojson": canvas.to_geojson(),
        "center": canvas.center,
        "zoom": canvas.zoom,
        "bounds": bounds_dict(canvas.bounds),
        "distance_km": session.map_view.geometry.distance_km,
        "selected_timestamp": session.selection.current(),
    }
