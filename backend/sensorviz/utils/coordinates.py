"""
Coordinate utilities.

Great-circle distances and bounding boxes for WGS84 lat/lon fixes.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray


EARTH_RADIUS_KM = 6371.0  # Mean radius


def haversine_distance(
    lat1: ArrayLike,
    lon1: ArrayLike,
    lat2: ArrayLike,
    lon2: ArrayLike,
    radius: float = EARTH_RADIUS_KM,
) -> NDArray[np.float64]:
    """
    Calculate great-circle distance between points.

    Works element-wise on arrays, so consecutive legs of a track can be
    computed in one call.

    Args:
        lat1, lon1: First point coordinates in degrees
        lat2, lon2: Second point coordinates in degrees
        radius: Sphere radius; the result is in the same unit

    Returns:
        Distance(s) in units of ``radius`` (km by default)
    """
    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    dlat = np.radians(np.subtract(lat2, lat1))
    dlon = np.radians(np.subtract(lon2, lon1))

    a = np.sin(dlat/2)**2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon/2)**2
    a = np.clip(a, 0.0, 1.0)  # rounding can push a just past 1
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1-a))

    return radius * c


def track_legs(lat: NDArray[np.float64], lon: NDArray[np.float64]) -> NDArray[np.float64]:
    """Distance of each consecutive leg of a track (len(lat) - 1 values, km)."""
    if len(lat) < 2:
        return np.zeros(0, dtype=np.float64)
    return haversine_distance(lat[:-1], lon[:-1], lat[1:], lon[1:])


def bounding_box(
    lat: NDArray[np.float64],
    lon: NDArray[np.float64],
) -> tuple[float, float, float, float]:
    """
    Return (min_lat, min_lon, max_lat, max_lon) of the given points.

    Raises ValueError for empty input.
    """
    if len(lat) == 0:
        raise ValueError("Cannot compute bounds of an empty track")
    return (
        float(np.min(lat)),
        float(np.min(lon)),
        float(np.max(lat)),
        float(np.max(lon)),
    )
