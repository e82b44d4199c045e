"""
API routes for the sensor dataset, the shared selection and the views.
"""

import logging

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from sensorviz.api.payloads import (
    chart_dict,
    map_dict,
    selection_dict,
    summary_dict,
    track_dict,
    upload_dict,
)
from sensorviz.api.schemas import (
    ChartClickRequest,
    ChartViewResponse,
    DatasetSummaryResponse,
    ErrorResponse,
    MapViewResponse,
    RecordResponse,
    SelectRequest,
    SelectionResponse,
    TrackResponse,
    UploadResponse,
)
from sensorviz.errors import FileReadError
from sensorviz.services.csv_parser import check_file_type, decode_upload, parse_csv
from sensorviz.services.session import get_session


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dataset", tags=["dataset"])


@router.post(
    "",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def upload_dataset(file: UploadFile = File(...)):
    """
    Upload a CSV sensor log, replacing the current dataset.

    Non-CSV files and unreadable files are rejected without touching the
    dataset. If another upload starts while this one is being read, this
    one is discarded.
    """
    filename = file.filename or ""
    check_file_type(filename)

    session = get_session()
    generation = session.begin_load()

    try:
        data = await file.read()
    except OSError as e:
        raise FileReadError(f"Could not read {filename}: {e}") from e

    records = parse_csv(decode_upload(data))

    if not session.complete_load(generation, filename, records):
        return JSONResponse(
            status_code=409,
            content={"detail": f"Upload superseded: {filename}", "code": "superseded"},
        )

    return upload_dict(filename, len(records))


@router.delete("", response_model=DatasetSummaryResponse)
async def clear_dataset():
    """Empty the dataset (and the selection)."""
    session = get_session()
    session.clear()
    return summary_dict(session)


@router.get("", response_model=DatasetSummaryResponse)
async def get_dataset_summary():
    """Summary statistics for the loaded dataset."""
    return summary_dict(get_session())


@router.get("/records", response_model=list[RecordResponse])
async def get_records():
    """All records, in file order."""
    return [record.to_dict() for record in get_session().records]


@router.get("/track", response_model=TrackResponse)
async def get_track():
    """Valid GPS fixes, total distance and bounds."""
    return track_dict(get_session())


# ============================================================================
# Selection Routes
# ============================================================================

selection_router = APIRouter(prefix="/selection", tags=["selection"])


@selection_router.get("", response_model=SelectionResponse)
async def get_selection():
    """Current selection. `record` is null when nothing in the dataset matches."""
    return selection_dict(get_session())


@selection_router.put("", response_model=SelectionResponse)
async def set_selection(request: SelectRequest):
    """Select a sample by timestamp. Unknown timestamps are accepted."""
    session = get_session()
    session.selection.select(request.timestamp)
    return selection_dict(session)


@selection_router.delete("", response_model=SelectionResponse)
async def clear_selection():
    session = get_session()
    session.selection.clear()
    return selection_dict(session)


# ============================================================================
# View Routes
# ============================================================================

views_router = APIRouter(prefix="/views", tags=["views"])


@views_router.get("/chart", response_model=ChartViewResponse)
async def get_chart_view():
    """Accelerometer and gyroscope series keyed by timestamp."""
    return chart_dict(get_session())


@views_router.post("/chart/click", response_model=SelectionResponse)
async def chart_click(request: ChartClickRequest):
    """Forward a chart click. Clicks without an active label are ignored."""
    session = get_session()
    session.chart_view.handle_click(request.active_label)
    return selection_dict(session)


@views_router.get("/map", response_model=MapViewResponse)
async def get_map_view():
    """Track, markers and selected marker as GeoJSON."""
    return map_dict(get_session())


@views_router.post("/map/markers/{marker_id}/click", response_model=SelectionResponse)
async def map_marker_click(marker_id: int):
    """Forward a click on a fix marker."""
    session = get_session()
    try:
        session.map_canvas.click(marker_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Marker not found: {marker_id}")
    logger.debug(f"Map marker {marker_id} clicked ({session.map_view.marker_timestamp(marker_id)})")
    return selection_dict(session)
