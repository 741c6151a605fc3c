"""Formatting utilities for display."""

from datetime import datetime, timedelta


def format_duration(duration: timedelta | float) -> str:
    """Format a duration as Xh YYm ZZs."""
    seconds = duration.total_seconds() if isinstance(duration, timedelta) else duration
    seconds = max(seconds, 0)
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    return f"{hours}h {minutes:02d}m {secs:02d}s"


def format_distance(meters: float) -> str:
    km = meters / 1000
    return f"{km:.2f} km ({km * 0.621371:.2f} mi)"


def format_elevation(meters: float) -> str:
    return f"{meters:.0f} m ({meters * 3.28084:.0f} ft)"


def format_speed(mps: float) -> str:
    kmh = mps * 3.6
    return f"{kmh:.1f} km/h ({kmh * 0.621371:.1f} mph)"


def format_timestamp(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
