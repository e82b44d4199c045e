"""
Sensor Log Visualizer - FastAPI Backend

Main application entry point and configuration.
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sensorviz.api.dataset import router as dataset_router, selection_router, views_router
from sensorviz.errors import SensorVizError
from sensorviz.services.session import get_session


# Environment configuration
CSV_FILE_ENV = "SENSORVIZ_CSV_FILE"
LOG_LEVEL_ENV = "SENSORVIZ_LOG_LEVEL"
CORS_ORIGINS_ENV = "SENSORVIZ_CORS_ORIGINS"

APP_NAME = "Sensor Log Visualizer"
APP_VERSION = "0.1.0"


# Configure logging
logging.basicConfig(
    level=os.getenv(LOG_LEVEL_ENV, "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def cors_origins() -> list[str]:
    raw = os.getenv(CORS_ORIGINS_ENV, "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting Sensor Log Visualizer backend")

    csv_file = os.getenv(CSV_FILE_ENV)
    session = get_session()
    if csv_file and not session.records:
        try:
            count = session.load_file(Path(csv_file))
            logger.info(f"Preloaded {count} samples from {csv_file}")
        except SensorVizError as e:
            logger.error(f"Failed to preload {csv_file}: {e}")
    else:
        logger.info("No dataset loaded. Use POST /dataset to upload a CSV file")

    yield

    # Shutdown
    logger.info("Shutting down Sensor Log Visualizer backend")


# Create FastAPI app
app = FastAPI(
    title=APP_NAME,
    description="""
    Backend API for exploring GPS + IMU sensor logs.

    ## Features
    - Ingest CSV sensor logs (timestamp, GPS fix, accelerometer, gyroscope, attitude)
    - Derive the GPS track: valid fixes, great-circle distance, bounds
    - Serve accelerometer/gyroscope chart series and a GeoJSON track map
    - Keep one selected sample shared by the chart and map views

    ## Data Flow
    1. Upload a CSV via POST /dataset
    2. Get chart series via GET /views/chart and the map via GET /views/map
    3. Select a sample via chart/map clicks or PUT /selection
    4. Clear via DELETE /dataset
    """,
    version=APP_VERSION,
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SensorVizError)
async def ingestion_error_handler(request: Request, exc: SensorVizError):
    """File-level ingestion failures: the dataset is left unchanged."""
    logger.warning(f"Rejected upload: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc), "code": exc.code})


# Include routers
app.include_router(dataset_router)
app.include_router(selection_router)
app.include_router(views_router)


@app.get("/")
async def root():
    """Root endpoint - basic health check."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    session = get_session()

    return {
        "status": "healthy",
        "filename": session.filename,
        "sample_count": len(session.records),
        "selected_timestamp": session.selection.current(),
    }
