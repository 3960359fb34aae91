"""Höhenprofil-Analyse eines Tracks mit Kilometer-Abschnitten.

Ablauf: Validierung -> Glättung -> Gesamt-Höhenmeter (Hysterese über den
ganzen Track) -> Abschnitte -> Gesamtstatistik. Die öffentlichen Funktionen
werfen keine Exceptions, Fehler werden als ElevationAnalysisFailure
zurückgegeben.
"""

import time
from pathlib import Path
from typing import Iterable, Sequence, Union

import numpy as np
from tqdm import tqdm

from .elevation_calc import calculate_total_elevation_changes, elevations_of, round_half_up, smooth_elevation_data
from .exceptions import AnalysisError, InsufficientPointsError, InvalidPointError, RouteElevationError
from .gpx_reader import parse_gpx_string, read_gpx_file
from .logger import get_logger
from .models import AnalysisOutcome, ElevationAnalysisFailure, ElevationAnalysisResult, TrackPoint
from .segmenter import split_into_segments

logger = get_logger()


def validate_track(track: Sequence[TrackPoint]) -> None:
    """Prüft, dass ein Track analysierbar ist.

    Raises:
        InsufficientPointsError: Bei weniger als 2 Punkten.
        InvalidPointError: Bei nicht-endlichen Koordinaten oder Höhen.
    """
    if track is None or len(track) < 2:
        raise InsufficientPointsError(0 if track is None else len(track))

    for i, point in enumerate(track):
        if not point.is_finite():
            raise InvalidPointError(
                i, f"lat={point.latitude}, lon={point.longitude}, ele={point.elevation}"
            )


def _failure(error: Exception, filename: str | None) -> ElevationAnalysisFailure:
    logger.warning(f"Analyse fehlgeschlagen{f' für {filename}' if filename else ''}: {error}")
    return ElevationAnalysisFailure(error=str(error), filename=filename)


def _compute(
    track: Sequence[TrackPoint],
    segment_length_m: float,
    min_elevation_diff: float,
    use_smoothing: bool,
    smoothing_window: int,
    filename: str | None,
) -> ElevationAnalysisResult:
    validate_track(track)

    points = smooth_elevation_data(track, smoothing_window) if use_smoothing else list(track)

    # Gesamtwerte über den ganzen Track, nicht Summe der Abschnitte
    total_gain, total_loss = calculate_total_elevation_changes(elevations_of(points), min_elevation_diff)

    segmentation = split_into_segments(points, segment_length_m, min_elevation_diff)
    total_distance = segmentation.total_distance_m
    segment_count = len(segmentation.segments)

    net_elevation = total_gain - total_loss
    overall_grade = 100 * net_elevation / total_distance if total_distance > 0 else 0.0
    avg_gain = total_gain / segment_count if segment_count else 0.0

    median_gradient = min_gradient = max_gradient = None
    if segmentation.raw_grades:
        grades = np.asarray(segmentation.raw_grades)
        median_gradient = round_half_up(float(np.median(grades)))
        min_gradient = round_half_up(float(grades.min()))
        max_gradient = round_half_up(float(grades.max()))

    return ElevationAnalysisResult(
        filename=filename,
        km_segments=segmentation.segments,
        total_distance_km=round_half_up(total_distance / 1000, 2),
        total_elevation_gain=round_half_up(total_gain),
        total_elevation_loss=round_half_up(total_loss),
        net_elevation=round_half_up(net_elevation),
        avg_elevation_gain_per_segment=round_half_up(avg_gain),
        overall_grade_percent=round_half_up(overall_grade),
        start_elevation=round_half_up(points[0].elevation),
        end_elevation=round_half_up(points[-1].elevation),
        median_gradient=median_gradient,
        min_gradient=min_gradient,
        max_gradient=max_gradient,
    )


def analyze_track(
    track: Sequence[TrackPoint],
    segment_length_m: float = 1000.0,
    min_elevation_diff: float = 3.0,
    use_smoothing: bool = True,
    smoothing_window: int = 10,
    filename: str | None = None,
) -> AnalysisOutcome:
    """Analysiert das Höhenprofil eines Tracks in Abschnitten fester Länge.

    Args:
        track: Track-Punkte in Reihenfolge (mindestens 2).
        segment_length_m: Abschnittslänge in Metern (Default: 1000).
        min_elevation_diff: Schwellwert der Hysterese in Metern (Default: 3m).
        use_smoothing: Wenn True, werden die Höhen vorher geglättet.
        smoothing_window: Fenstergröße der Glättung in Punkten (Default: 10).
        filename: Optionaler Dateiname für das Ergebnis.

    Returns:
        ElevationAnalysisResult bei Erfolg, sonst ElevationAnalysisFailure mit
        Fehlermeldung, leeren Abschnitten und Nullwerten.

    Example:
        >>> result = analyze_track(points, min_elevation_diff=1.0)
        >>> if result.ok:
        ...     print(result.total_elevation_gain, [s.label for s in result.km_segments])
    """
    start_time = time.time()
    try:
        result = _compute(track, segment_length_m, min_elevation_diff, use_smoothing, smoothing_window, filename)
    except RouteElevationError as e:
        return _failure(e, filename)
    except Exception as e:
        logger.exception("Unerwarteter Fehler in der Höhenanalyse")
        return _failure(AnalysisError(e), filename)

    elapsed = time.time() - start_time
    logger.debug(
        f"Höhenanalyse für {len(track)} Punkte in {elapsed:.3f}s: "
        f"{result.total_distance_km} km, +{result.total_elevation_gain} m / -{result.total_elevation_loss} m"
    )
    return result


def analyze_gpx_elevation(
    source: Union[str, Path],
    filename: str | None = None,
    segment_length_m: float = 1000.0,
    min_elevation_diff: float = 1.0,
    use_smoothing: bool = True,
    smoothing_window: int = 10,
) -> AnalysisOutcome:
    """Liest ein GPX-Dokument und analysiert dessen Höhenprofil.

    Args:
        source: GPX-Inhalt als String oder Pfad zu einer GPX-Datei.
        filename: Optionaler Dateiname für das Ergebnis. Bei einem Pfad wird
                  standardmäßig dessen Dateiname verwendet.
        segment_length_m: Abschnittslänge in Metern (Default: 1000).
        min_elevation_diff: Schwellwert der Hysterese in Metern (Default: 1m).
        use_smoothing: Wenn True, werden die Höhen vorher geglättet.
        smoothing_window: Fenstergröße der Glättung in Punkten (Default: 10).

    Returns:
        ElevationAnalysisResult oder ElevationAnalysisFailure.
    """
    try:
        if isinstance(source, Path):
            filename = filename or source.name
            track = read_gpx_file(source)
        else:
            track = parse_gpx_string(source)
    except RouteElevationError as e:
        return _failure(e, filename)
    except Exception as e:
        logger.exception("Unerwarteter Fehler beim Lesen der GPX-Daten")
        return _failure(AnalysisError(e), filename)

    return analyze_track(
        track,
        segment_length_m=segment_length_m,
        min_elevation_diff=min_elevation_diff,
        use_smoothing=use_smoothing,
        smoothing_window=smoothing_window,
        filename=filename,
    )


def analyze_gpx_files(gpx_files: Iterable[Path], **kwargs) -> list[AnalysisOutcome]:
    """Analysiert mehrere GPX-Dateien nacheinander mit Fortschrittsanzeige.

    Args:
        gpx_files: Pfade der GPX-Dateien.
        **kwargs: Weitere Parameter für analyze_gpx_elevation.

    Returns:
        Ein Ergebnis pro Datei in Eingabe-Reihenfolge.
    """
    gpx_files = list(gpx_files)
    return [
        analyze_gpx_elevation(gpx_file, **kwargs)
        for gpx_file in tqdm(gpx_files, desc="Analysiere Höhenprofile", unit="Datei")
    ]
