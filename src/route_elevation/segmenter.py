"""Aufteilung eines Tracks in Abschnitte fester Länge.

Der Track wird Punkt für Punkt abgelaufen, die Distanz kumuliert und bei jeder
Überschreitung einer Abschnittsgrenze (oder am letzten Punkt) ein
KilometerSegment mit Anstieg, Abstieg und Steigung des Abschnitts erzeugt.
"""

from typing import Sequence

from .elevation_calc import calculate_total_elevation_changes, elevations_of, round_half_up
from .geo import haversine, path_length
from .logger import get_logger
from .models import KilometerSegment, Segmentation, TrackPoint

logger = get_logger()


def format_km(value: float) -> str:
    """Formatiert Kilometer für Abschnitts-Labels ohne überflüssige Nullen.

    Nominale Grenzen behalten alle Nachkommastellen (0.125 bleibt 0.125),
    nur Gleitkomma-Artefakte wie 0.30000000000000004 werden bereinigt.

    Example:
        >>> format_km(2.0), format_km(2.5), format_km(0.125), format_km(0.30000000000000004)
        ('2', '2.5', '0.125', '0.3')
    """
    text = repr(round(float(value), 6))
    if text.endswith(".0"):
        text = text[:-2]
    return "0" if text == "-0" else text


def split_into_segments(
    track: Sequence[TrackPoint], segment_length_m: float = 1000.0, min_elevation_diff: float = 3.0
) -> Segmentation:
    """Teilt einen Track in Abschnitte fester Länge und berechnet deren Statistiken.

    Eine Abschnittsgrenze ist erreicht, wenn die kumulierte Distanz
    ``segment_number * segment_length_m`` erreicht oder der letzte Punkt
    erreicht ist. Der letzte Abschnitt kann kürzer sein. Grenzpunkte gehören
    zu beiden angrenzenden Abschnitten.

    Args:
        track: Track-Punkte (ggf. geglättet) in Reihenfolge.
        segment_length_m: Nominale Abschnittslänge in Metern (Default: 1000).
        min_elevation_diff: Schwellwert für die Hysterese in Metern (Default: 3m).

    Returns:
        Segmentation mit Abschnitten, Gesamtdistanz in Metern und den
        ungerundeten Steigungen je Abschnitt.
    """
    result = Segmentation()
    if len(track) < 2:
        return result

    segment_length_km = segment_length_m / 1000
    last_idx = len(track) - 1
    total_distance = 0.0
    segment_start_idx = 0
    segment_number = 1

    for i in range(1, len(track)):
        prev, point = track[i - 1], track[i]
        total_distance += haversine(prev.latitude, prev.longitude, point.latitude, point.longitude)

        if total_distance < segment_number * segment_length_m and i != last_idx:
            continue

        segment_points = track[segment_start_idx : i + 1]
        gain, loss = calculate_total_elevation_changes(elevations_of(segment_points), min_elevation_diff)

        # Exakte Distanz des Abschnitts, nicht aus der laufenden Summe abgeleitet
        segment_distance = path_length(segment_points)
        net = gain - loss
        grade = 100 * net / segment_distance if segment_distance > 0 else 0.0

        start_km = (segment_number - 1) * segment_length_km
        end_km = round_half_up(total_distance / 1000, 2) if i == last_idx else segment_number * segment_length_km

        result.segments.append(
            KilometerSegment(
                label=f"{format_km(start_km)}-{format_km(end_km)} km",
                elevation_gain=round_half_up(gain),
                elevation_loss=round_half_up(loss),
                net_elevation=round_half_up(net),
                grade_percent=round_half_up(grade),
                end_elevation=round_half_up(point.elevation),
            )
        )
        result.raw_grades.append(grade)

        segment_start_idx = i
        segment_number += 1

    result.total_distance_m = total_distance
    logger.debug(f"{len(result.segments)} Abschnitte über {total_distance:.0f} m erzeugt")

    return result
