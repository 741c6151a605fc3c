"""Flat [lat, lon] coordinate lists for map rendering and storage."""

import json
from collections.abc import Iterable

from gpx_activities.models import ActivityMetrics, TrackPoint


def track_coordinates(points: ActivityMetrics | Iterable[TrackPoint]) -> list[list[float]]:
    """One [lat, lon] pair per track point, in original order.

    Accepts ActivityMetrics directly; its full point list is used, untimed
    points included.
    """
    if isinstance(points, ActivityMetrics):
        return points.coordinates
    return [[pt.lat, pt.lon] for pt in points]


def coordinates_to_json(points: ActivityMetrics | Iterable[TrackPoint]) -> str:
    """Serialize coordinates as a JSON array of 2-element arrays."""
    return json.dumps(track_coordinates(points))


def coordinates_from_json(text: str | None) -> list[list[float]]:
    """Rebuild a coordinate list from its stored JSON form.

    Empty text or a JSON null gives an empty list.

    Raises:
        ValueError: If the text is not a JSON array of [lat, lon] pairs.
    """
    if not text or not text.strip():
        return []
    data = json.loads(text)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of coordinates, got {type(data).__name__}")

    coords = []
    for pair in data:
        if not isinstance(pair, list) or len(pair) != 2:
            raise ValueError(f"Invalid coordinate pair: {pair!r}")
        coords.append([float(pair[0]), float(pair[1])])
    return coords
