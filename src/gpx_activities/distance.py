"""Great-circle distance between track points.

Uses the Haversine formula on a spherical Earth. Stored activity distances
were computed with this exact formula shape, so keep it (atan2 form, mean
radius) when changing anything here.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gpx_activities.models import TrackPoint

# Earth's mean radius in meters
EARTH_RADIUS_M = 6_371_000


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points using Haversine formula.

    Args:
        lat1, lon1: First point coordinates in degrees
        lat2, lon2: Second point coordinates in degrees

    Returns:
        Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    a = max(0.0, min(a, 1.0))  # rounding error can push a outside [0, 1]
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def point_distance(a: TrackPoint, b: TrackPoint) -> float:
    """Haversine distance between two TrackPoints in meters."""
    return haversine_distance(a.lat, a.lon, b.lat, b.lon)
