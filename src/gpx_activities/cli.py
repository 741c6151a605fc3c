import argparse
import json
import logging
import sys

from gpx_activities.config import load_config
from gpx_activities.coordinates import coordinates_to_json
from gpx_activities.extractor import TrackMetricsExtractor
from gpx_activities.formatters import (
    format_distance,
    format_duration,
    format_elevation,
    format_speed,
    format_timestamp,
)
from gpx_activities.models import DEFAULT_ACTIVITY_TYPE, DEFAULT_TITLE, ActivityMetrics
from gpx_activities.parser import read_gpx_file
from gpx_activities.stats import summarize_by_activity_type

logger = logging.getLogger(__name__)


def build_parser(config: dict | None = None) -> argparse.ArgumentParser:
    """Build argument parser with defaults from config file."""
    if config is None:
        config = {}

    parser = argparse.ArgumentParser(
        prog="gpx-activities",
        description="Import GPX activity files and report distance, elevation and speed.",
    )
    parser.add_argument("gpx_files", nargs="+", metavar="gpx_file", help="Path to GPX file")
    parser.add_argument(
        "--title",
        default=None,
        help="Override the activity title (default: track name from the file)",
    )
    parser.add_argument(
        "--activity-type",
        default=None,
        help="Override the activity type (default: track type from the file)",
    )
    parser.add_argument(
        "--default-title",
        default=config.get("default_title", DEFAULT_TITLE),
        help=f"Title used when the file has none (default: {DEFAULT_TITLE})",
    )
    parser.add_argument(
        "--default-activity-type",
        default=config.get("default_activity_type", DEFAULT_ACTIVITY_TYPE),
        help=f"Activity type used when the file has none (default: {DEFAULT_ACTIVITY_TYPE})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the import record(s) as JSON instead of a report",
    )
    parser.add_argument(
        "--coordinates-out",
        default=None,
        metavar="PATH",
        help="Write the [lat, lon] coordinate list as JSON to PATH (single file only)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped track points and other details to stderr",
    )
    parser.set_defaults(log_level=config.get("log_level", "WARNING"))
    return parser


def format_report(metrics: ActivityMetrics) -> str:
    lines = [
        "=== GPX Activity Import ===",
        f"Title:          {metrics.title}",
        f"Type:           {metrics.activity_type}",
        f"Start:          {format_timestamp(metrics.start_time)}",
        f"End:            {format_timestamp(metrics.end_time)}",
        f"Duration:       {format_duration(metrics.duration)}",
        f"Distance:       {format_distance(metrics.distance)}",
        f"Elevation Gain: {format_elevation(metrics.elevation_gain)}",
        f"Elevation Loss: {format_elevation(metrics.elevation_loss)}",
        f"Avg Speed:      {format_speed(metrics.avg_speed)}",
        f"Max Speed:      {format_speed(metrics.max_speed)}",
        f"Track Points:   {metrics.track_point_count}",
    ]
    return "\n".join(lines)


def format_statistics(activities: list[ActivityMetrics]) -> str:
    lines = ["=== Statistics by Activity Type ==="]
    for stats in summarize_by_activity_type(activities):
        lines.append(
            f"{stats.sport_name}: {stats.total_activities} activities, "
            f"{format_distance(stats.total_distance)}, "
            f"{format_duration(stats.total_duration)}, "
            f"avg {format_speed(stats.avg_speed)}, "
            f"max {format_speed(stats.max_speed)}, "
            f"gain {format_elevation(stats.total_elevation_gain)}"
        )
    return "\n".join(lines)


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.DEBUG if args.verbose else getattr(logging, str(args.log_level).upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> None:
    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    if args.coordinates_out and len(args.gpx_files) > 1:
        parser.error("--coordinates-out takes a single GPX file")

    _configure_logging(args)
    extractor = TrackMetricsExtractor()

    activities: list[ActivityMetrics] = []
    for gpx_path in args.gpx_files:
        try:
            doc = read_gpx_file(gpx_path, args.default_title, args.default_activity_type)
        except FileNotFoundError:
            print(f"Error: File not found: {gpx_path}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Error processing GPX file: {e}", file=sys.stderr)
            sys.exit(1)

        metrics = extractor.parse(
            doc.records,
            title=args.title or doc.title,
            activity_type=args.activity_type or doc.activity_type,
        )
        logger.info("Imported %s: %d track points", gpx_path, metrics.track_point_count)
        activities.append(metrics)

    if args.coordinates_out:
        try:
            with open(args.coordinates_out, "w") as f:
                f.write(coordinates_to_json(activities[0]))
        except OSError as e:
            print(f"Error writing coordinates: {e}", file=sys.stderr)
            sys.exit(1)

    if args.json:
        records = [a.to_dict() for a in activities]
        print(json.dumps(records[0] if len(records) == 1 else records, indent=2))
        return

    print("\n\n".join(format_report(a) for a in activities))
    if len(activities) > 1:
        print("")
        print(format_statistics(activities))
