import math
from typing import Sequence

from .models import TrackPoint

EARTH_RADIUS_M = 6371000


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Berechnet die Distanz zwischen zwei Koordinaten in Metern.

    Verwendet die Haversine-Formel für Großkreisberechnungen auf einer Kugel
    mit Erdradius 6371 km. Identische Punkte liefern exakt 0.

    Args:
        lat1: Breitengrad Punkt 1 in Dezimalgrad.
        lon1: Längengrad Punkt 1 in Dezimalgrad.
        lat2: Breitengrad Punkt 2 in Dezimalgrad.
        lon2: Längengrad Punkt 2 in Dezimalgrad.

    Returns:
        Distanz in Metern als float.

    Example:
        >>> distance = haversine(52.5200, 13.4050, 48.1351, 11.5820)  # Berlin -> München
        >>> print(f"{distance / 1000:.1f} km")
        504.2 km
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rundungsfehler bei Antipoden können a minimal über 1 heben
    a = min(a, 1.0)
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def path_length(points: Sequence[TrackPoint]) -> float:
    """Summiert die Haversine-Distanzen aufeinanderfolgender Punkte in Metern."""
    total = 0.0
    for prev, point in zip(points, points[1:]):
        total += haversine(prev.latitude, prev.longitude, point.latitude, point.longitude)
    return total
