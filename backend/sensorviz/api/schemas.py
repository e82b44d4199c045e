"""
API schemas (Pydantic models) for request/response validation.
"""

from typing import Any, Optional
from pydantic import BaseModel


# ============================================================================
# Dataset Schemas
# ============================================================================

class RecordResponse(BaseModel):
    """One sensor sample."""
    timestamp: str
    lat: float
    lon: float
    alt: float
    sats: int
    accX: float
    accY: float
    accZ: float
    gyroX: float
    gyroY: float
    gyroZ: float
    pitch: float
    roll: float


class BoundsResponse(BaseModel):
    """Bounding box of the valid GPS fixes (degrees)."""
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float


class UploadResponse(BaseModel):
    """Result of a successful upload."""
    filename: str
    sample_count: int
    message: str


class DatasetSummaryResponse(BaseModel):
    """Summary statistics for the loaded dataset."""
    filename: Optional[str] = None
    sample_count: int
    fix_count: int
    distance_km: float
    first_timestamp: Optional[str] = None
    last_timestamp: Optional[str] = None
    duration_s: Optional[float] = None
    max_sats: int
    bounds: Optional[BoundsResponse] = None


class TrackResponse(BaseModel):
    """GPS track derived from the dataset."""
    valid_fixes: list[RecordResponse]
    coordinates: list[tuple[float, float]]  # (lat, lon)
    cumulative_km: list[float]
    distance_km: float
    bounds: Optional[BoundsResponse] = None


# ============================================================================
# Selection Schemas
# ============================================================================

class SelectRequest(BaseModel):
    """Request to select a sample by timestamp."""
    timestamp: str


class SelectionResponse(BaseModel):
    """Current selection and the record it refers to, if any."""
    timestamp: Optional[str] = None
    record: Optional[RecordResponse] = None


# ============================================================================
# View Schemas
# ============================================================================

class ChartSeriesResponse(BaseModel):
    key: str
    name: str
    color: str
    values: list[float]


class ChartPanelResponse(BaseModel):
    id: str
    title: str
    series: list[ChartSeriesResponse]


class ChartViewResponse(BaseModel):
    """Line-chart data for the accelerometer and gyroscope panels."""
    timestamps: list[str]
    tick_labels: list[str]
    panels: list[ChartPanelResponse]
    selected_timestamp: Optional[str] = None
    selected_index: Optional[int] = None
    selection_color: str


class ChartClickRequest(BaseModel):
    """Click reported by a chart widget."""
    active_label: Optional[str] = None


class MapViewResponse(BaseModel):
    """Map layers as GeoJSON plus viewport state."""
    geojson: dict[str, Any]
    center: tuple[float, float]  # (lat, lon)
    zoom: Optional[int] = None
    bounds: Optional[BoundsResponse] = None
    distance_km: float
    selected_timestamp: Optional[str] = None


# ============================================================================
# Error Schemas
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    code: Optional[str] = None
