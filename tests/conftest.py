import math

import pytest

from route_elevation.geo import EARTH_RADIUS_M
from route_elevation.models import TrackPoint


def equator_track(elevations, step_m=100.0):
    """Erstellt einen Track entlang des Äquators mit festem Punktabstand."""
    step_deg = math.degrees(step_m / EARTH_RADIUS_M)
    return [TrackPoint(0.0, i * step_deg, float(ele)) for i, ele in enumerate(elevations)]


@pytest.fixture
def make_track():
    return equator_track


@pytest.fixture
def gpx_content():
    """Einfaches GPX-Dokument mit fünf Trackpunkten."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test">
  <trk>
    <trkseg>
      <trkpt lat="48.0" lon="11.0"><ele>500</ele></trkpt>
      <trkpt lat="48.01" lon="11.01"><ele>520</ele></trkpt>
      <trkpt lat="48.02" lon="11.02"><ele>510</ele></trkpt>
      <trkpt lat="48.03" lon="11.03"><ele>540</ele></trkpt>
      <trkpt lat="48.04" lon="11.04"><ele>550</ele></trkpt>
    </trkseg>
  </trk>
</gpx>"""


@pytest.fixture
def gpx_file(tmp_path, gpx_content):
    gpx_file = tmp_path / "test_profile.gpx"
    gpx_file.write_text(gpx_content, encoding="utf-8")
    return gpx_file
