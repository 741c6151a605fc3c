"""Per-sport aggregate statistics over imported activities."""

from collections import defaultdict
from collections.abc import Iterable

from gpx_activities.models import ActivityMetrics, SportStatistics


def summarize_activities(sport_name: str, activities: list[ActivityMetrics]) -> SportStatistics:
    """Aggregate a list of activities of one sport.

    Average speed is total distance over total duration, so longer
    activities weigh more than short ones.
    """
    durations = [max(a.duration.total_seconds(), 0.0) for a in activities]
    total_distance = sum(a.distance for a in activities)
    total_duration = sum(durations)

    return SportStatistics(
        sport_name=sport_name,
        total_activities=len(activities),
        total_distance=total_distance,
        total_duration_seconds=total_duration,
        avg_speed=total_distance / total_duration if total_duration > 0 else 0.0,
        max_speed=max((a.max_speed for a in activities), default=0.0),
        max_duration_seconds=max(durations, default=0.0),
        total_elevation_gain=sum(a.elevation_gain for a in activities),
    )


def summarize_by_activity_type(activities: Iterable[ActivityMetrics]) -> list[SportStatistics]:
    """Group activities by type; sorted by total distance, longest first."""
    by_type: dict[str, list[ActivityMetrics]] = defaultdict(list)
    for activity in activities:
        by_type[activity.activity_type].append(activity)

    stats = [summarize_activities(name, group) for name, group in by_type.items()]
    stats.sort(key=lambda s: (-s.total_distance, s.sport_name))
    return stats
