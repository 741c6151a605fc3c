"""GPX markup reader.

Walks a GPX document and hands every ``trkpt`` to the extractor as a raw
record of strings. Field validation is left to the extractor so that one
bad point cannot reject the whole file. Namespaces are matched with
wildcards, which covers GPX 1.0, GPX 1.1 and Garmin's TrackPointExtension
v1/v2.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from gpx_activities.extractor import TrackMetricsExtractor
from gpx_activities.models import (
    DEFAULT_ACTIVITY_TYPE,
    DEFAULT_TITLE,
    ActivityMetrics,
    RawTrackPoint,
)

logger = logging.getLogger(__name__)


class GpxReadError(ValueError):
    """The document could not be read as XML at all."""


@dataclass
class GpxDocument:
    title: str = DEFAULT_TITLE
    activity_type: str = DEFAULT_ACTIVITY_TYPE
    records: list[RawTrackPoint] = field(default_factory=list)


def _child_text(element: ET.Element, path: str) -> str | None:
    """Text of a child element: None if absent, "" if present but empty."""
    child = element.find(path)
    if child is None:
        return None
    return child.text or ""


def _track_metadata(root: ET.Element, tag: str, default: str) -> str:
    value = _child_text(root, f"{{*}}trk/{{*}}{tag}")
    if value is None or not value.strip():
        return default
    return value.strip()


def _read_track_point(trkpt: ET.Element) -> RawTrackPoint:
    heart_rate = None
    cadence = None
    extension = trkpt.find("{*}extensions/{*}TrackPointExtension")
    if extension is not None:
        heart_rate = _child_text(extension, "{*}hr")
        cadence = _child_text(extension, "{*}cad")

    return RawTrackPoint(
        lat=trkpt.get("lat"),
        lon=trkpt.get("lon"),
        elevation=_child_text(trkpt, "{*}ele"),
        time=_child_text(trkpt, "{*}time"),
        heart_rate=heart_rate,
        cadence=cadence,
    )


def read_gpx(
    source: str | bytes,
    default_title: str = DEFAULT_TITLE,
    default_activity_type: str = DEFAULT_ACTIVITY_TYPE,
) -> GpxDocument:
    """Read GPX text into a title, activity type and raw track points.

    The defaults apply when the first track has no (or a blank) name or type.

    Raises:
        GpxReadError: If the source is not well-formed XML.
    """
    source = source.lstrip()
    try:
        root = ET.fromstring(source)
    except ET.ParseError as e:
        raise GpxReadError(f"Invalid GPX document: {e}") from e

    records = [
        _read_track_point(trkpt)
        for trk in root.findall("{*}trk")
        for seg in trk.findall("{*}trkseg")
        for trkpt in seg.findall("{*}trkpt")
    ]
    doc = GpxDocument(
        title=_track_metadata(root, "name", default_title),
        activity_type=_track_metadata(root, "type", default_activity_type),
        records=records,
    )
    logger.debug("Read %d track point(s) from GPX %r", len(records), doc.title)
    return doc


def read_gpx_file(
    filepath: str | Path,
    default_title: str = DEFAULT_TITLE,
    default_activity_type: str = DEFAULT_ACTIVITY_TYPE,
) -> GpxDocument:
    """Read a GPX file from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        GpxReadError: If the file is not well-formed XML.
    """
    with open(filepath, "rb") as f:
        return read_gpx(f.read(), default_title, default_activity_type)


def parse_gpx(
    source: str | bytes,
    title: str | None = None,
    activity_type: str | None = None,
    extractor: TrackMetricsExtractor | None = None,
) -> ActivityMetrics:
    """Read GPX text and compute its ActivityMetrics.

    ``title`` and ``activity_type`` override the values found in the file.
    """
    doc = read_gpx(source)
    extractor = extractor or TrackMetricsExtractor()
    return extractor.parse(doc.records, title or doc.title, activity_type or doc.activity_type)


def parse_gpx_file(
    filepath: str | Path,
    title: str | None = None,
    activity_type: str | None = None,
    extractor: TrackMetricsExtractor | None = None,
) -> ActivityMetrics:
    """Read a GPX file and compute its ActivityMetrics."""
    with open(filepath, "rb") as f:
        return parse_gpx(f.read(), title, activity_type, extractor)
