"""Unit-Tests für elevation_analysis.py.

Testet die komplette Höhenanalyse inklusive:
- Validierung und Fehler-Ergebnisse
- Gesamtwerte über den ganzen Track
- Abschnitte und Gesamtstatistik
- Einlesen von GPX-Strings und -Dateien
"""

import math

import numpy as np
import pytest

from route_elevation.elevation_analysis import (
    analyze_gpx_elevation,
    analyze_gpx_files,
    analyze_track,
    validate_track,
)
from route_elevation.exceptions import InsufficientPointsError, InvalidPointError
from route_elevation.models import ElevationAnalysisFailure, ElevationAnalysisResult, TrackPoint

NUMERIC_FIELDS = [
    "total_distance_km",
    "total_elevation_gain",
    "total_elevation_loss",
    "net_elevation",
    "avg_elevation_gain_per_segment",
    "overall_grade_percent",
    "start_elevation",
    "end_elevation",
]


def random_track(seed, n=400):
    """Zufälliger, verrauschter Track für Eigenschaftstests."""
    rng = np.random.default_rng(seed)
    lat = 47.0 + np.cumsum(rng.normal(0, 0.0003, n))
    lon = 11.0 + np.cumsum(rng.normal(0, 0.0003, n))
    ele = 800 + np.cumsum(rng.normal(0.2, 2.0, n)) + rng.uniform(-3, 3, n)
    return [TrackPoint(float(a), float(b), float(c)) for a, b, c in zip(lat, lon, ele)]


# ============================================================================
# Test validate_track
# ============================================================================


class TestValidateTrack:
    """Tests für validate_track."""

    def test_valid_track(self, make_track):
        validate_track(make_track([1, 2, 3]))

    def test_single_point(self):
        with pytest.raises(InsufficientPointsError) as exc_info:
            validate_track([TrackPoint(48.0, 11.0, 500.0)])
        assert exc_info.value.count == 1

    def test_non_finite_value(self, make_track):
        track = make_track([1, 2, 3])
        track[2] = track[2].with_elevation(math.inf)

        with pytest.raises(InvalidPointError) as exc_info:
            validate_track(track)
        assert exc_info.value.index == 2


# ============================================================================
# Test analyze_track
# ============================================================================


class TestAnalyzeTrack:
    """Tests für analyze_track."""

    def test_single_point_returns_error_result(self):
        result = analyze_track([TrackPoint(48.0, 11.0, 500.0)])

        assert isinstance(result, ElevationAnalysisFailure)
        assert not result.ok
        assert result.status == "error"
        assert "Insufficient track points" in result.error
        assert result.km_segments == []
        for field in NUMERIC_FIELDS:
            assert getattr(result, field) == 0

    def test_empty_track_returns_error_result(self):
        result = analyze_track([])
        assert not result.ok
        assert result.km_segments == []

    def test_invalid_point_returns_error_result(self, make_track):
        track = make_track([100, 110, 120])
        track[1] = TrackPoint(math.nan, track[1].longitude, 110.0)

        result = analyze_track(track, filename="broken.gpx")

        assert not result.ok
        assert "index 1" in result.error
        assert result.filename == "broken.gpx"

    def test_end_to_end_scenario(self, make_track):
        """11 Punkte, 100 m Abstand, 25 m hoch und wieder runter."""
        track = make_track([0, 5, 10, 15, 20, 25, 20, 15, 10, 5, 0], step_m=100.0)

        result = analyze_track(track, segment_length_m=1000.0, min_elevation_diff=1.0, use_smoothing=False)

        assert isinstance(result, ElevationAnalysisResult)
        assert result.ok
        assert result.error is None
        assert len(result.km_segments) == 1
        assert result.km_segments[0].label == "0-1 km"
        assert result.total_distance_km == pytest.approx(1.0)
        assert result.total_elevation_gain == pytest.approx(25.0)
        assert result.total_elevation_loss == pytest.approx(25.0)
        assert result.net_elevation == pytest.approx(0.0)
        assert result.overall_grade_percent == pytest.approx(0.0)
        assert result.avg_elevation_gain_per_segment == pytest.approx(25.0)
        assert result.start_elevation == 0.0
        assert result.end_elevation == 0.0

    def test_whole_track_totals_not_sum_of_segments(self, make_track):
        """Die Gesamtwerte werden an Abschnittsgrenzen nicht zurückgesetzt."""
        track = make_track(range(11), step_m=100.0)

        result = analyze_track(track, segment_length_m=190.0, min_elevation_diff=3.0, use_smoothing=False)

        assert len(result.km_segments) == 5
        assert sum(s.elevation_gain for s in result.km_segments) == 0.0
        assert result.total_elevation_gain == 9.0
        assert result.avg_elevation_gain_per_segment == 1.8

    def test_default_threshold_is_three_meters(self, make_track):
        track = make_track([0, 2, 0, 2, 0, 2, 0, 2, 0, 2, 0, 2], step_m=100.0)

        assert analyze_track(track, use_smoothing=False).total_elevation_gain == 0.0
        assert analyze_track(track, use_smoothing=False, min_elevation_diff=1.0).total_elevation_gain == 12.0

    def test_smoothing_changes_working_track(self, make_track):
        elevations = [100, 110, 100, 110, 100, 110, 100, 110, 100, 110, 100, 110, 100, 110, 100]
        track = make_track(elevations, step_m=50.0)

        raw = analyze_track(track, use_smoothing=False)
        smoothed = analyze_track(track, use_smoothing=True)

        assert raw.total_elevation_gain == 70.0
        assert smoothed.total_elevation_gain < raw.total_elevation_gain
        assert smoothed.start_elevation == pytest.approx(np.mean(elevations[:6]), abs=0.05)
        assert raw.total_distance_km == smoothed.total_distance_km
        # Eingabe bleibt unverändert
        assert [p.elevation for p in track] == [float(e) for e in elevations]

    def test_gradient_statistics(self, make_track):
        track = make_track([0, 5, 10, 15, 20, 25, 20, 15, 10, 5, 0], step_m=100.0)

        result = analyze_track(track, segment_length_m=490.0, min_elevation_diff=1.0, use_smoothing=False)

        assert [s.grade_percent for s in result.km_segments] == [5.0, -5.0]
        assert result.min_gradient == -5.0
        assert result.max_gradient == 5.0
        assert result.median_gradient == pytest.approx(0.0, abs=0.05)

    def test_coincident_points(self):
        track = [TrackPoint(48.0, 11.0, 100.0), TrackPoint(48.0, 11.0, 120.0)]

        result = analyze_track(track, use_smoothing=False)

        assert result.ok
        assert result.total_distance_km == 0.0
        assert result.overall_grade_percent == 0.0
        assert result.km_segments[0].grade_percent == 0.0

    def test_rounding_at_reporting_boundary(self, make_track):
        track = make_track([100.0, 103.456, 107.891], step_m=123.456)

        result = analyze_track(track, min_elevation_diff=1.0, use_smoothing=False)

        assert result.total_elevation_gain == 7.9
        assert result.total_distance_km == 0.25
        assert result.end_elevation == 107.9

    def test_half_values_round_up(self, make_track):
        result = analyze_track(make_track([0.0, 2.25]), min_elevation_diff=1.0, use_smoothing=False)

        assert result.total_elevation_gain == 2.3
        assert result.net_elevation == 2.3
        assert result.end_elevation == 2.3
        assert result.km_segments[0].elevation_gain == 2.3

    def test_unexpected_error_is_returned_as_data(self, make_track, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("kaputt")

        monkeypatch.setattr("route_elevation.elevation_analysis.split_into_segments", boom)

        result = analyze_track(make_track([1, 2, 3]))

        assert not result.ok
        assert "RuntimeError" in result.error
        assert "kaputt" in result.error

    @pytest.mark.parametrize("seed", range(20))
    def test_net_elevation_invariant_on_random_tracks(self, seed):
        result = analyze_track(random_track(seed), min_elevation_diff=1.0)

        assert result.ok
        assert result.net_elevation == pytest.approx(
            result.total_elevation_gain - result.total_elevation_loss, abs=0.151
        )
        assert len(result.km_segments) >= 1

        # Labels lückenlos von 0 bis Gesamtdistanz
        bounds = [tuple(float(v) for v in s.label.removesuffix(" km").split("-")) for s in result.km_segments]
        assert bounds[0][0] == 0.0
        for (_, prev_end), (start, _) in zip(bounds, bounds[1:]):
            assert start == prev_end
        assert bounds[-1][1] == result.total_distance_km


# ============================================================================
# Test analyze_gpx_elevation
# ============================================================================


class TestAnalyzeGpxElevation:
    """Tests für analyze_gpx_elevation."""

    def test_from_string(self, gpx_content):
        result = analyze_gpx_elevation(gpx_content, filename="tour.gpx", use_smoothing=False)

        assert result.ok
        assert result.filename == "tour.gpx"
        assert result.start_elevation == 500.0
        assert result.end_elevation == 550.0
        # 500 -> 520 -> 510 -> 540 -> 550 mit Schwellwert 1 m
        assert result.total_elevation_gain == 60.0
        assert result.total_elevation_loss == 10.0
        assert result.net_elevation == 50.0
        assert 5 < result.total_distance_km < 6

    def test_from_path_uses_file_name(self, gpx_file):
        result = analyze_gpx_elevation(gpx_file)

        assert result.ok
        assert result.filename == "test_profile.gpx"

    def test_smoothing_window_is_forwarded(self, gpx_content):
        # 5 Punkte: bei Fenster 10 keine Glättung, bei Fenster 2 Mittel aus [500, 520]
        default = analyze_gpx_elevation(gpx_content)
        narrow = analyze_gpx_elevation(gpx_content, smoothing_window=2)

        assert default.start_elevation == 500.0
        assert narrow.start_elevation == 510.0
        assert narrow.end_elevation == 545.0

    def test_invalid_document_returns_error_result(self):
        result = analyze_gpx_elevation("nicht gpx", filename="x.gpx")

        assert not result.ok
        assert result.filename == "x.gpx"
        assert result.error
        assert result.km_segments == []

    def test_single_point_document(self):
        gpx = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1"><trk><trkseg><trkpt lat="48.0" lon="11.0"><ele>500</ele></trkpt></trkseg></trk></gpx>"""

        result = analyze_gpx_elevation(gpx)

        assert not result.ok
        assert "Not enough track points" in result.error
        assert result.total_distance_km == 0

    def test_missing_file_returns_error_result(self, tmp_path):
        result = analyze_gpx_elevation(tmp_path / "fehlt.gpx")

        assert not result.ok
        assert result.filename == "fehlt.gpx"


class TestAnalyzeGpxFiles:
    """Tests für analyze_gpx_files."""

    def test_one_result_per_file(self, tmp_path, gpx_file):
        broken = tmp_path / "broken.gpx"
        broken.write_text("<gpx>", encoding="utf-8")

        results = analyze_gpx_files([gpx_file, broken], segment_length_m=2000.0)

        assert [r.filename for r in results] == ["test_profile.gpx", "broken.gpx"]
        assert results[0].ok
        assert not results[1].ok
