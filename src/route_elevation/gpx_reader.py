"""Einlesen von GPX-Dateien in eine Liste von TrackPoints."""

from pathlib import Path

import gpxpy
import gpxpy.gpx

from .exceptions import InsufficientPointsError, ParsingError
from .logger import get_logger
from .models import TrackPoint

logger = get_logger()

NOT_ENOUGH_POINTS_MESSAGE = (
    "Not enough track points found in the GPX file. Ensure your file contains valid track points."
)


def _collect_points(gpx: gpxpy.gpx.GPX) -> list:
    """Sammelt Trackpunkte, ersatzweise Routenpunkte oder Wegpunkte."""
    points = [p for track in gpx.tracks for seg in track.segments for p in seg.points]

    if not points:
        points = [p for route in gpx.routes for p in route.points]
        if points:
            logger.debug("Keine Trackpunkte gefunden, verwende Routenpunkte")

    if not points:
        points = list(gpx.waypoints)
        if points:
            logger.debug("Keine Track- oder Routenpunkte gefunden, verwende Wegpunkte")

    return points


def parse_gpx_string(content: str) -> list[TrackPoint]:
    """Parst GPX-Text in eine Liste von TrackPoints.

    Punkte ohne Höhe erhalten die Höhe 0. Punkte exakt auf (0, 0) werden
    als ungültig verworfen.

    Args:
        content: GPX-Dokument als String.

    Returns:
        Liste der TrackPoints in Dokument-Reihenfolge.

    Raises:
        ParsingError: Wenn das Dokument kein gültiges GPX ist.
        InsufficientPointsError: Wenn weniger als 2 gültige Punkte enthalten sind.
    """
    try:
        gpx = gpxpy.parse(content)
    except gpxpy.gpx.GPXException as e:
        raise ParsingError(f"Error parsing GPX file: {e}") from e

    track = [
        TrackPoint(p.latitude, p.longitude, p.elevation if p.elevation is not None else 0.0)
        for p in _collect_points(gpx)
        if p.latitude != 0 or p.longitude != 0
    ]

    if len(track) < 2:
        raise InsufficientPointsError(len(track), NOT_ENOUGH_POINTS_MESSAGE)

    logger.debug(f"{len(track)} Punkte aus GPX gelesen")
    return track


def read_gpx_file(gpx_file: Path) -> list[TrackPoint]:
    """Liest eine GPX-Datei mit robustem Encoding-Handling.

    Probiert verschiedene Encoding-Strategien (UTF-8, UTF-8 mit BOM, CP1252,
    zuletzt Latin-1, das jede Bytefolge dekodiert) und entfernt BOM sowie führende Whitespaces vor dem Parsen.

    Args:
        gpx_file: Pfad zur GPX-Datei.

    Returns:
        Liste der TrackPoints.

    Raises:
        ParsingError: Wenn die Datei fehlt oder mit keinem Encoding geparst werden kann.
        InsufficientPointsError: Wenn weniger als 2 gültige Punkte enthalten sind.
    """
    if not gpx_file.exists():
        raise ParsingError(f"GPX-Datei nicht gefunden: {gpx_file}")

    encodings = ["utf-8", "utf-8-sig", "cp1252", "latin-1"]
    last_error: Exception | None = None

    for encoding in encodings:
        try:
            content = gpx_file.read_text(encoding=encoding)
        except UnicodeDecodeError as e:
            last_error = e
            continue

        # Entferne BOM falls vorhanden
        if content.startswith("\ufeff"):
            content = content[1:]

        try:
            return parse_gpx_string(content.lstrip())
        except ParsingError as e:
            logger.debug(f"Parsen von {gpx_file.name} mit {encoding} fehlgeschlagen: {e}")
            last_error = e

    raise ParsingError(f"Fehler beim Parsen von {gpx_file.name}: {last_error}")
