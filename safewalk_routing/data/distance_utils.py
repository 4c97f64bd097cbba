"""
Distance utilities in degree space.

Incident proximity is measured as planar Euclidean distance between raw
latitude/longitude values. This holds up only at the few-kilometre scale the
planner targets and must not be swapped for a geodesic formula, since every
radius and score constant is expressed in degrees.
"""

import math
from typing import Dict, Iterable, Tuple


def planar_degree_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate sqrt(dLat^2 + dLon^2) between two points.

    Args:
        lat1, lon1: First point coordinates
        lat2, lon2: Second point coordinates

    Returns:
        Distance in degrees
    """
    d_lat = lat2 - lat1
    d_lon = lon2 - lon1
    return math.sqrt(d_lat * d_lat + d_lon * d_lon)


def get_points_bounds(points: Iterable[Tuple[float, float]]) -> Dict[str, float]:
    """
    Get the geographic bounds of a set of (lat, lon) points.

    Raises:
        ValueError: If no points are given
    """
    points = list(points)
    if not points:
        raise ValueError("Cannot compute bounds of an empty point set")

    lats = [float(p[0]) for p in points]
    lons = [float(p[1]) for p in points]

    return {
        'lat_min': min(lats),
        'lat_max': max(lats),
        'lon_min': min(lons),
        'lon_max': max(lons)
    }
