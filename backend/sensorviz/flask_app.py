"""
Sensor Log Visualizer - Flask Backend

Alternative to FastAPI for environments where FastAPI isn't available.
Same API structure, different framework.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request

from sensorviz.api.payloads import (
    chart_dict,
    map_dict,
    selection_dict,
    summary_dict,
    track_dict,
    upload_dict,
)
from sensorviz.errors import SensorVizError
from sensorviz.services.csv_parser import check_file_type, decode_upload, parse_csv
from sensorviz.services.session import get_session, init_session


LOG_LEVEL_ENV = "SENSORVIZ_LOG_LEVEL"


def log_level() -> str:
    return os.getenv(LOG_LEVEL_ENV, "INFO").upper()


# Configure logging
logging.basicConfig(
    level=log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Create Flask app
app = Flask(__name__)


@app.errorhandler(SensorVizError)
def handle_ingestion_error(exc: SensorVizError):
    logger.warning(f"Rejected upload: {exc}")
    return jsonify({"detail": str(exc), "code": exc.code}), 400


# ============================================================================
# Health Endpoints
# ============================================================================

@app.route("/")
def root():
    """Root endpoint - basic health check."""
    return jsonify({
        "name": "Sensor Log Visualizer",
        "version": "0.1.0",
        "status": "running",
    })


@app.route("/health")
def health_check():
    """Health check endpoint."""
    session = get_session()
    return jsonify({
        "status": "healthy",
        "filename": session.filename,
        "sample_count": len(session.records),
        "selected_timestamp": session.selection.current(),
    })


# ============================================================================
# Dataset Endpoints
# ============================================================================

@app.route("/dataset", methods=["POST"])
def upload_dataset():
    """Upload a CSV sensor log, replacing the current dataset."""
    upload = request.files.get("file")
    if upload is None:
        return jsonify({"detail": "file is required", "code": "missing_file"}), 400

    filename = upload.filename or ""
    check_file_type(filename)

    session = get_session()
    generation = session.begin_load()
    records = parse_csv(decode_upload(upload.read()))

    if not session.complete_load(generation, filename, records):
        return jsonify({"detail": f"Upload superseded: {filename}", "code": "superseded"}), 409

    return jsonify(upload_dict(filename, len(records)))


@app.route("/dataset", methods=["DELETE"])
def clear_dataset():
    """Empty the dataset (and the selection)."""
    session = get_session()
    session.clear()
    return jsonify(summary_dict(session))


@app.route("/dataset", methods=["GET"])
def get_dataset_summary():
    return jsonify(summary_dict(get_session()))


@app.route("/dataset/records", methods=["GET"])
def get_records():
    return jsonify([record.to_dict() for record in get_session().records])


@app.route("/dataset/track", methods=["GET"])
def get_track():
    return jsonify(track_dict(get_session()))


# ============================================================================
# Selection Endpoints
# ============================================================================

@app.route("/selection", methods=["GET"])
def get_selection():
    return jsonify(selection_dict(get_session()))


@app.route("/selection", methods=["PUT"])
def set_selection():
    """Select a sample by timestamp. Unknown timestamps are accepted."""
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get("timestamp"), str):
        return jsonify({"detail": "timestamp is required", "code": "invalid_request"}), 400

    session = get_session()
    session.selection.select(data["timestamp"])
    return jsonify(selection_dict(session))


@app.route("/selection", methods=["DELETE"])
def clear_selection():
    session = get_session()
    session.selection.clear()
    return jsonify(selection_dict(session))


# ============================================================================
# View Endpoints
# ============================================================================

@app.route("/views/chart", methods=["GET"])
def get_chart_view():
    return jsonify(chart_dict(get_session()))


@app.route("/views/chart/click", methods=["POST"])
def chart_click():
    data = request.get_json(silent=True) or {}
    session = get_session()
    session.chart_view.handle_click(data.get("active_label"))
    return jsonify(selection_dict(session))


@app.route("/views/map", methods=["GET"])
def get_map_view():
    return jsonify(map_dict(get_session()))


@app.route("/views/map/markers/<int:marker_id>/click", methods=["POST"])
def map_marker_click(marker_id: int):
    session = get_session()
    try:
        session.map_canvas.click(marker_id)
    except KeyError:
        return jsonify({"detail": f"Marker not found: {marker_id}", "code": "marker_not_found"}), 404
    return jsonify(selection_dict(session))


# ============================================================================
# Startup
# ============================================================================

def create_app(csv_file: Optional[Path] = None) -> Flask:
    """Create and configure the Flask app, optionally preloading a CSV log."""
    if csv_file is not None and csv_file.exists():
        session = init_session(csv_file)
        logger.info(f"Preloaded {len(session.records)} samples from {csv_file}")
    else:
        init_session()
        logger.info("No dataset loaded. Use POST /dataset to upload a CSV file")

    return app


if __name__ == "__main__":
    import sys

    # Allow specifying a CSV file as argument
    csv_file = Path(sys.argv[1]) if len(sys.argv) > 1 else None

    create_app(csv_file)
    app.run(host="0.0.0.0", port=8000, debug=True)
