import os
from datetime import datetime, timedelta, timezone

import pytest

from gpx_activities.models import RawTrackPoint, TrackPoint

SAMPLE_GPX_PATH = os.path.join(
    os.path.dirname(__file__), "functional", "data", "sample_run.gpx"
)

BASE_TIME = datetime(2024, 6, 15, 8, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    """A clock that always returns the same instant."""
    now = datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    return lambda: now


@pytest.fixture
def climb_and_descent_points():
    """Three points 100m -> 150m -> 120m, 30s apart."""
    return [
        TrackPoint(lat=45.0, lon=-73.0, elevation=100.0, time=BASE_TIME),
        TrackPoint(
            lat=45.001,
            lon=-73.0,
            elevation=150.0,
            time=BASE_TIME + timedelta(seconds=30),
        ),
        TrackPoint(
            lat=45.002,
            lon=-73.0,
            elevation=120.0,
            time=BASE_TIME + timedelta(seconds=60),
        ),
    ]


@pytest.fixture
def raw_two_point_records():
    """Two raw records 0.001 degrees of latitude and 10 seconds apart."""
    return [
        RawTrackPoint(lat="45.0", lon="-73.0", time="2024-06-15T08:00:00Z"),
        RawTrackPoint(lat="45.001", lon="-73.0", time="2024-06-15T08:00:10Z"),
    ]
