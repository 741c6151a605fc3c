import os
import tempfile
from datetime import datetime, timezone

import pytest

from gpx_activities.extractor import TrackMetricsExtractor
from gpx_activities.parser import (
    GpxReadError,
    parse_gpx,
    parse_gpx_file,
    read_gpx,
    read_gpx_file,
)

SAMPLE_GPX_PATH = os.path.join(
    os.path.dirname(__file__), "..", "functional", "data", "sample_run.gpx"
)
UNTITLED_GPX_PATH = os.path.join(
    os.path.dirname(__file__), "..", "functional", "data", "untitled_ride.gpx"
)


class TestReadGpx:
    def test_read_sample_file(self):
        doc = read_gpx_file(SAMPLE_GPX_PATH)
        assert doc.title == "Morning Run"
        assert doc.activity_type == "Run"
        assert len(doc.records) == 5
        first = doc.records[0]
        assert first.lat == "45.0000"
        assert first.lon == "-73.0000"
        assert first.elevation == "100.0"
        assert first.time == "2024-06-15T08:00:00Z"
        assert first.heart_rate == "120"
        assert first.cadence == "80"

    def test_malformed_point_is_still_read(self):
        doc = read_gpx_file(SAMPLE_GPX_PATH)
        assert doc.records[3].elevation == "abc"
        assert doc.records[3].heart_rate is None

    def test_gpx_1_0_without_metadata(self):
        doc = read_gpx_file(UNTITLED_GPX_PATH)
        assert doc.title == "Untitled Activity"
        assert doc.activity_type == "Unknown"
        assert len(doc.records) == 3
        assert doc.records[2].time is None

    def test_custom_defaults(self):
        doc = read_gpx_file(UNTITLED_GPX_PATH, default_title="Ride", default_activity_type="Cycle")
        assert doc.title == "Ride"
        assert doc.activity_type == "Cycle"

    def test_blank_name_uses_default(self):
        doc = read_gpx("""<gpx xmlns="http://www.topografix.com/GPX/1/1">
          <trk><name>   </name><trkseg></trkseg></trk>
        </gpx>""")
        assert doc.title == "Untitled Activity"

    def test_indented_xml_declaration(self):
        doc = read_gpx("""
        <?xml version="1.0"?>
        <gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1">
          <trk><trkseg>
            <trkpt lat="37.0" lon="-122.0"><ele>100</ele></trkpt>
          </trkseg></trk>
        </gpx>""")
        assert len(doc.records) == 1
        assert doc.records[0].time is None

    def test_missing_lat_lon_attributes(self):
        doc = read_gpx("""<gpx xmlns="http://www.topografix.com/GPX/1/1">
          <trk><trkseg><trkpt><time>2024-06-15T08:00:00Z</time></trkpt></trkseg></trk>
        </gpx>""")
        assert doc.records[0].lat is None
        assert doc.records[0].lon is None

    def test_empty_element_is_empty_string(self):
        doc = read_gpx("""<gpx xmlns="http://www.topografix.com/GPX/1/1">
          <trk><trkseg><trkpt lat="1" lon="2"><ele/></trkpt></trkseg></trk>
        </gpx>""")
        assert doc.records[0].elevation == ""

    def test_multiple_tracks_and_segments(self):
        doc = read_gpx(b"""<gpx xmlns="http://www.topografix.com/GPX/1/1">
          <trk><name>First</name>
            <trkseg><trkpt lat="1" lon="1"/><trkpt lat="2" lon="2"/></trkseg>
            <trkseg><trkpt lat="3" lon="3"/></trkseg>
          </trk>
          <trk><name>Second</name><trkseg><trkpt lat="4" lon="4"/></trkseg></trk>
        </gpx>""")
        assert doc.title == "First"
        assert [r.lat for r in doc.records] == ["1", "2", "3", "4"]

    def test_ignores_route_and_waypoints(self):
        doc = read_gpx("""<gpx xmlns="http://www.topografix.com/GPX/1/1">
          <wpt lat="9" lon="9"/>
          <rte><rtept lat="8" lon="8"/></rte>
        </gpx>""")
        assert doc.records == []

    def test_invalid_xml(self):
        with pytest.raises(GpxReadError):
            read_gpx("this is not xml <trk>")

    def test_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            read_gpx_file("/nonexistent/path/file.gpx")


class TestParseGpx:
    def test_parse_sample_file(self):
        metrics = parse_gpx_file(SAMPLE_GPX_PATH)
        assert metrics.title == "Morning Run"
        assert metrics.activity_type == "Run"
        assert metrics.track_point_count == 4
        assert metrics.distance == pytest.approx(3 * 111.19, abs=0.05)
        assert metrics.elevation_gain == pytest.approx(55.0)
        assert metrics.elevation_loss == pytest.approx(30.0)
        assert metrics.start_time == datetime(2024, 6, 15, 8, 0, 0, tzinfo=timezone.utc)
        assert metrics.end_time == datetime(2024, 6, 15, 8, 1, 40, tzinfo=timezone.utc)
        assert metrics.avg_speed == pytest.approx(metrics.distance / 100)
        # fastest pair is 30s apart; the dropped 08:01:30 point leaves a 40s gap
        assert metrics.max_speed == pytest.approx(111.19 / 30, abs=0.01)
        assert metrics.track_points[0].heart_rate == 120
        assert metrics.track_points[0].cadence == 80

    def test_overrides(self):
        metrics = parse_gpx_file(SAMPLE_GPX_PATH, title="Renamed", activity_type="Walk")
        assert metrics.title == "Renamed"
        assert metrics.activity_type == "Walk"

    def test_untimed_points_kept_for_rendering(self):
        metrics = parse_gpx_file(UNTITLED_GPX_PATH)
        assert metrics.track_point_count == 3
        assert metrics.duration.total_seconds() == 20
        assert len(metrics.coordinates) == 3

    def test_no_timestamps(self):
        fixed = datetime(2030, 1, 1, tzinfo=timezone.utc)
        gpx_content = """<?xml version="1.0"?>
        <gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1">
          <trk><trkseg>
            <trkpt lat="37.0" lon="-122.0"><ele>100</ele></trkpt>
            <trkpt lat="37.1" lon="-122.0"><ele>200</ele></trkpt>
          </trkseg></trk>
        </gpx>"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".gpx", delete=False) as f:
            f.write(gpx_content)
            f.flush()
            metrics = parse_gpx_file(f.name, extractor=TrackMetricsExtractor(now=lambda: fixed))
        os.unlink(f.name)
        assert metrics.track_point_count == 2
        assert metrics.distance == 0.0
        assert metrics.elevation_gain == 0.0
        assert metrics.start_time == fixed

    def test_empty_gpx(self):
        metrics = parse_gpx("""<?xml version="1.0"?>
        <gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1">
          <trk><trkseg></trkseg></trk>
        </gpx>""")
        assert metrics.track_point_count == 0
        assert metrics.distance == 0.0
