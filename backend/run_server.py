#!/usr/bin/env python3
"""
Launch script for the Sensor Log Visualizer backend.

Usage:
    python run_server.py [csv_file] [--port PORT] [--host HOST] [--sample]

Examples:
    python run_server.py                     # Start with an empty dataset
    python run_server.py /path/to/log.csv    # Preload a sensor log
    python run_server.py --sample            # Preload a generated sample walk
    python run_server.py --port 5000         # Run on port 5000
"""

import argparse
import os
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))


def main():
    parser = argparse.ArgumentParser(description="Sensor Log Visualizer Backend Server")
    parser.add_argument(
        "csv_file",
        nargs="?",
        default=None,
        help="CSV sensor log to load at startup (optional)"
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to run server on (default: 8000)"
    )
    parser.add_argument(
        "--host", "-H",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1, use 0.0.0.0 for all interfaces)"
    )
    parser.add_argument(
        "--sample", "-s",
        action="store_true",
        help="Generate ./data/sample_walk.csv and load it at startup"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Run in debug mode"
    )

    args = parser.parse_args()

    csv_file = Path(args.csv_file) if args.csv_file else None
    if args.sample:
        from sensorviz.utils.sample_data import generate_walk_log
        csv_file = generate_walk_log(Path("./data/sample_walk.csv"), duration_s=120.0, dropout_every=15)

    print(f"Sensor Log Visualizer Backend")
    print(f"=" * 40)
    print(f"CSV file: {csv_file.absolute() if csv_file else '(none)'}")
    print(f"Server: http://{args.host}:{args.port}")
    print(f"=" * 40)

    if csv_file is not None:
        if csv_file.exists():
            os.environ["SENSORVIZ_CSV_FILE"] = str(csv_file)
        else:
            print(f"\nWarning: CSV file does not exist: {csv_file}")
            print("You can upload one later via POST /dataset")

    if args.debug:
        os.environ["SENSORVIZ_LOG_LEVEL"] = "DEBUG"

    print("\nAPI Endpoints:")
    print("  GET    /                   - Health check")
    print("  GET    /health             - Detailed health")
    print("  POST   /dataset            - Upload CSV sensor log")
    print("  DELETE /dataset            - Clear dataset")
    print("  GET    /dataset            - Dataset summary")
    print("  GET    /dataset/records    - All records")
    print("  GET    /dataset/track      - GPS track")
    print("  GET    /selection          - Current selection")
    print("  PUT    /selection          - Select a sample")
    print("  GET    /views/chart        - Chart series")
    print("  GET    /views/map          - Map layers (GeoJSON)")
    print("\nStarting server...")

    import uvicorn

    uvicorn.run(
        "sensorviz.main:app",
        host=args.host,
        port=args.port,
        reload=args.debug,
        log_level="debug" if args.debug else "info",
    )


if __name__ == "__main__":
    main()
