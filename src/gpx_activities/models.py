from dataclasses import dataclass, field
from datetime import datetime, timedelta

DEFAULT_TITLE = "Untitled Activity"
DEFAULT_ACTIVITY_TYPE = "Unknown"


@dataclass
class RawTrackPoint:
    """A track point as read from markup, before any validation."""

    lat: str | float | None = None
    lon: str | float | None = None
    elevation: str | float | None = None
    time: str | datetime | None = None
    heart_rate: str | int | None = None
    cadence: str | int | None = None


@dataclass(frozen=True)
class TrackPoint:
    lat: float
    lon: float
    elevation: float | None = None  # meters
    time: datetime | None = None  # UTC
    heart_rate: int | None = None  # beats per minute
    cadence: int | None = None  # steps or revolutions per minute


@dataclass(frozen=True)
class ActivityMetrics:
    title: str
    activity_type: str
    start_time: datetime
    end_time: datetime
    distance: float = 0.0  # meters
    elevation_gain: float = 0.0  # meters
    elevation_loss: float = 0.0  # meters
    avg_speed: float = 0.0  # m/s
    max_speed: float = 0.0  # m/s
    track_points: tuple[TrackPoint, ...] = field(default_factory=tuple)

    @property
    def track_point_count(self) -> int:
        return len(self.track_points)

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def distance_km(self) -> float:
        return self.distance / 1000.0

    @property
    def avg_speed_kmh(self) -> float:
        return self.avg_speed * 3.6

    @property
    def max_speed_kmh(self) -> float:
        return self.max_speed * 3.6

    @property
    def coordinates(self) -> list[list[float]]:
        """[lat, lon] pairs for every track point, in original order."""
        return [[pt.lat, pt.lon] for pt in self.track_points]

    def to_dict(self) -> dict:
        """Import record with JSON-serializable values."""
        return {
            "title": self.title,
            "activity_type": self.activity_type,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "distance_meters": self.distance,
            "elevation_gain_meters": self.elevation_gain,
            "elevation_loss_meters": self.elevation_loss,
            "average_speed_ms": self.avg_speed,
            "max_speed_ms": self.max_speed,
            "track_points": self.track_point_count,
            "track_coordinates": self.coordinates,
        }


@dataclass(frozen=True)
class SportStatistics:
    sport_name: str
    total_activities: int
    total_distance: float  # meters
    total_duration_seconds: float
    avg_speed: float  # m/s
    max_speed: float  # m/s
    max_duration_seconds: float
    total_elevation_gain: float  # meters

    @property
    def total_distance_km(self) -> float:
        return self.total_distance / 1000.0

    @property
    def avg_speed_kmh(self) -> float:
        return self.avg_speed * 3.6

    @property
    def max_speed_kmh(self) -> float:
        return self.max_speed * 3.6

    @property
    def total_duration(self) -> timedelta:
        return timedelta(seconds=self.total_duration_seconds)

    @property
    def max_duration(self) -> timedelta:
        return timedelta(seconds=self.max_duration_seconds)
