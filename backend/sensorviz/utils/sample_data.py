"""
Sample data generator for testing.

Generates realistic-looking GPS + IMU sensor logs in the visualizer's CSV format.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import numpy as np

from sensorviz.models.record import RECORD_FIELDS


def build_walk_log(
    duration_s: float = 60.0,
    sample_rate_hz: float = 1.0,
    center_lat: float = 48.8566,
    center_lon: float = 2.3522,
    loop_radius_m: float = 50.0,
    start: Optional[datetime] = None,
    dropout_every: int = 0,
    seed: Optional[int] = None,
) -> str:
    """
    Build CSV text for a figure-8 walk.

    Args:
        dropout_every: if > 0, every Nth sample has no GPS fix (lat/lon 0)
        seed: random seed for reproducible noise

    Returns:
        CSV text with a header row
    """
    rng = np.random.default_rng(seed)
    if start is None:
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)

    n_samples = max(int(duration_s * sample_rate_hz), 2)
    elapsed = np.linspace(0, duration_s, n_samples)

    # Figure-8 parametric curve (lemniscate of Gerono)
    t_param = elapsed / duration_s * 2 * np.pi
    x_local = loop_radius_m * np.cos(t_param)
    y_local = loop_radius_m * np.sin(t_param) * np.cos(t_param)

    x_local += rng.normal(0, 0.5, n_samples)
    y_local += rng.normal(0, 0.5, n_samples)

    # Convert local meters to GPS coordinates
    meters_per_deg_lat = 111000
    meters_per_deg_lon = 111000 * np.cos(np.radians(center_lat))
    lat = center_lat + y_local / meters_per_deg_lat
    lon = center_lon + x_local / meters_per_deg_lon

    alt = 35.0 + rng.normal(0, 0.3, n_samples)
    sats = rng.integers(6, 13, n_samples)

    # Walking IMU: gravity on Z plus step oscillation
    step = np.sin(2 * np.pi * 1.8 * elapsed)
    acc_x = 0.3 * step + rng.normal(0, 0.05, n_samples)
    acc_y = 0.1 * np.cos(2 * np.pi * 1.8 * elapsed) + rng.normal(0, 0.05, n_samples)
    acc_z = 9.81 + 0.8 * step + rng.normal(0, 0.05, n_samples)

    gyro = rng.normal(0, 0.02, (3, n_samples))
    gyro[2] += np.gradient(np.unwrap(np.arctan2(np.gradient(y_local), np.gradient(x_local))))

    pitch = np.degrees(np.arctan2(acc_x, acc_z))
    roll = np.degrees(np.arctan2(acc_y, acc_z))

    if dropout_every > 0:
        lat[::dropout_every] = 0.0
        lon[::dropout_every] = 0.0

    lines = [",".join(RECORD_FIELDS)]
    for i in range(n_samples):
        timestamp = start + timedelta(seconds=float(elapsed[i]))
        lines.append(
            f"{timestamp.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3]}Z,"
            f"{lat[i]:.7f},"
            f"{lon[i]:.7f},"
            f"{alt[i]:.1f},"
            f"{sats[i]},"
            f"{acc_x[i]:.3f},"
            f"{acc_y[i]:.3f},"
            f"{acc_z[i]:.3f},"
            f"{gyro[0][i]:.3f},"
            f"{gyro[1][i]:.3f},"
            f"{gyro[2][i]:.3f},"
            f"{pitch[i]:.2f},"
            f"{roll[i]:.2f}"
        )

    return "\n".join(lines) + "\n"


def generate_walk_log(output_path: Path, **kwargs) -> Path:
    """Write a figure-8 walk log to disk (see build_walk_log for options)."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(build_walk_log(**kwargs), encoding="utf-8")
    return output_path


if __name__ == "__main__":
    # Generate a sample log when run directly
    output = generate_walk_log(Path("./data/sample_walk.csv"), duration_s=120.0, dropout_every=15)
    print(f"Generated sample log: {output}")
