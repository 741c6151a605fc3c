"""Track-metrics extraction.

Turns raw track-point records into an ActivityMetrics summary. Ingestion is
best-effort: a malformed point is dropped and logged, it never aborts the
import of the whole activity.

All time and distance metrics are computed over the "valid sequence": the
points carrying a timestamp, stably sorted by time. The full point list,
untimed points included, is kept on the result in encounter order.
"""

import logging
import math
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from gpxpy.gpx import GPXException
from gpxpy.gpxfield import parse_time

from gpx_activities.distance import point_distance
from gpx_activities.models import (
    DEFAULT_ACTIVITY_TYPE,
    DEFAULT_TITLE,
    ActivityMetrics,
    RawTrackPoint,
    TrackPoint,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_coordinate(value: str | float | None) -> float | None:
    if value is None:
        return 0.0
    try:
        result = float(str(value).strip())
    except ValueError:
        return None
    return result if math.isfinite(result) else None


def _parse_elevation(value: str | float) -> float:
    result = float(str(value).strip())
    if not math.isfinite(result):
        raise ValueError(f"non-finite elevation: {value}")
    return result


def _parse_timestamp(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        dt = value
    else:
        dt = parse_time(str(value).strip())
        if dt is None:
            raise ValueError("empty timestamp")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _parse_positive_int(value: str | int | None) -> int | None:
    """Lenient integer parse for sensor extensions: bad values become None."""
    if value is None:
        return None
    try:
        result = int(str(value).strip())
    except ValueError:
        return None
    return result if result > 0 else None


def parse_track_point(raw: RawTrackPoint) -> TrackPoint | None:
    """Convert a raw record into a TrackPoint, or None if it is malformed.

    Missing lat/lon default to 0.0. A present but unparseable lat, lon,
    elevation or timestamp drops the point, as does a latitude outside
    [-90, 90] or a longitude outside [-180, 180]. Heart rate and cadence never
    drop a point; unparseable values are simply left out.
    """
    lat = _parse_coordinate(raw.lat)
    lon = _parse_coordinate(raw.lon)
    if lat is None or lon is None:
        logger.debug("Dropping track point with bad coordinates: lat=%r lon=%r", raw.lat, raw.lon)
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        logger.debug("Dropping track point with out-of-range coordinates: lat=%r lon=%r", raw.lat, raw.lon)
        return None

    elevation = None
    if raw.elevation is not None:
        try:
            elevation = _parse_elevation(raw.elevation)
        except ValueError:
            logger.debug("Dropping track point with bad elevation: %r", raw.elevation)
            return None

    time = None
    if raw.time is not None:
        try:
            time = _parse_timestamp(raw.time)
        except (GPXException, ValueError, OverflowError):
            logger.debug("Dropping track point with bad timestamp: %r", raw.time)
            return None

    return TrackPoint(
        lat=lat,
        lon=lon,
        elevation=elevation,
        time=time,
        heart_rate=_parse_positive_int(raw.heart_rate),
        cadence=_parse_positive_int(raw.cadence),
    )


def parse_track_points(records: Iterable[RawTrackPoint]) -> list[TrackPoint]:
    """Parse every record, keeping only the well-formed points in order."""
    points: list[TrackPoint] = []
    dropped = 0
    for raw in records:
        point = parse_track_point(raw)
        if point is None:
            dropped += 1
            continue
        points.append(point)
    if dropped:
        logger.info("Skipped %d malformed track point(s), kept %d", dropped, len(points))
    return points


def valid_sequence(points: Iterable[TrackPoint]) -> list[TrackPoint]:
    """Timestamped points sorted by time; ties keep their original order."""
    return sorted((pt for pt in points if pt.time is not None), key=lambda pt: pt.time)


def _pairs(points: list[TrackPoint]) -> Iterable[tuple[TrackPoint, TrackPoint]]:
    return zip(points, points[1:])


def total_distance(points: list[TrackPoint]) -> float:
    """Sum of Haversine distances over consecutive pairs, in meters."""
    return sum((point_distance(a, b) for a, b in _pairs(points)), 0.0)


def elevation_change(points: list[TrackPoint]) -> tuple[float, float]:
    """Return (gain, loss) in meters over consecutive pairs.

    Pairs where either point lacks an elevation contribute nothing.
    """
    gain = 0.0
    loss = 0.0
    for prev, curr in _pairs(points):
        if prev.elevation is None or curr.elevation is None:
            continue
        diff = curr.elevation - prev.elevation
        if diff > 0:
            gain += diff
        else:
            loss += abs(diff)
    return gain, loss


def _pair_speed(a: TrackPoint, b: TrackPoint) -> float:
    elapsed = (b.time - a.time).total_seconds()
    if elapsed <= 0:
        return 0.0
    return point_distance(a, b) / elapsed


def max_speed(points: list[TrackPoint]) -> float:
    """Fastest consecutive-pair speed in m/s over a time-sorted sequence."""
    return max((_pair_speed(a, b) for a, b in _pairs(points)), default=0.0)


def average_speed(distance: float, points: list[TrackPoint]) -> float:
    """Distance over the wall-clock span of a time-sorted sequence, in m/s."""
    if len(points) < 2:
        return 0.0
    elapsed = (points[-1].time - points[0].time).total_seconds()
    if elapsed <= 0:
        return 0.0
    return distance / elapsed


class TrackMetricsExtractor:
    """Computes ActivityMetrics from raw track-point records.

    Stateless apart from the clock used to stamp activities that carry no
    usable timing, so a single instance can be shared freely.
    """

    def __init__(self, now: Callable[[], datetime] | None = None):
        self._now = now or _utcnow

    def parse(
        self,
        records: Iterable[RawTrackPoint],
        title: str | None = None,
        activity_type: str | None = None,
    ) -> ActivityMetrics:
        points = parse_track_points(records)
        return self.compute(points, title, activity_type)

    def compute(
        self,
        points: list[TrackPoint],
        title: str | None = None,
        activity_type: str | None = None,
    ) -> ActivityMetrics:
        title = title or DEFAULT_TITLE
        activity_type = activity_type or DEFAULT_ACTIVITY_TYPE

        valid = valid_sequence(points)
        if len(valid) < 2:
            now = self._now()
            logger.debug(
                "Activity %r has %d timestamped point(s); metrics left at zero",
                title, len(valid),
            )
            return ActivityMetrics(
                title=title,
                activity_type=activity_type,
                start_time=now,
                end_time=now,
                track_points=tuple(points),
            )

        distance = total_distance(valid)
        gain, loss = elevation_change(valid)

        return ActivityMetrics(
            title=title,
            activity_type=activity_type,
            start_time=valid[0].time,
            end_time=valid[-1].time,
            distance=distance,
            elevation_gain=gain,
            elevation_loss=loss,
            avg_speed=average_speed(distance, valid),
            max_speed=max_speed(valid),
            track_points=tuple(points),
        )


def parse(
    records: Iterable[RawTrackPoint],
    title: str | None = None,
    activity_type: str | None = None,
    now: Callable[[], datetime] | None = None,
) -> ActivityMetrics:
    """Parse raw track-point records into ActivityMetrics."""
    return TrackMetricsExtractor(now=now).parse(records, title, activity_type)
