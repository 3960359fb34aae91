"""Höhenmeterberechnung mit Glättung und Schwellwert (Hysterese)."""

import math
import time
from typing import Sequence

import numpy as np

from .logger import get_logger
from .models import ElevationChanges, TrackPoint

# Initialisiere Logger
logger = get_logger()


def round_half_up(value: float, digits: int = 1) -> float:
    """Rundet halbe Werte immer nach oben (Richtung +inf), wie bei Berichtswerten üblich.

    Im Gegensatz zu ``round()`` wird bei exakt halben Werten nicht auf die
    gerade Ziffer gerundet.

    Example:
        >>> round_half_up(2.25), round(2.25, 1)
        (2.3, 2.2)
        >>> round_half_up(-2.25)
        -2.2
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def elevations_of(track: Sequence[TrackPoint]) -> list[float]:
    """Extrahiert die Höhenwerte eines Tracks in Reihenfolge."""
    return [p.elevation for p in track]


def smooth_elevation_data(track: Sequence[TrackPoint], window_size: int = 10) -> list[TrackPoint]:
    """Glättet die Höhenwerte mit einem zentrierten gleitenden Durchschnitt.

    Für jeden Index i wird der Mittelwert der Originalhöhen im Fenster
    [max(0, i - w//2), min(n-1, i + w//2)] gebildet. An den Rändern schrumpft
    das Fenster, es wird nicht aufgefüllt oder gespiegelt. Breiten- und
    Längengrad bleiben unverändert, der Eingabe-Track wird nicht verändert.

    Args:
        track: Liste der Track-Punkte.
        window_size: Fenstergröße in Punkten (Default: 10).

    Returns:
        Neue Liste gleicher Länge mit geglätteten Höhen. Bei
        ``len(track) <= window_size`` eine unveränderte Kopie.

    Example:
        >>> track = [TrackPoint(48.0, 11.0, e) for e in (100, 104, 98, 103, 101)]
        >>> smoothed = smooth_elevation_data(track, window_size=2)
        >>> [round(p.elevation, 1) for p in smoothed]
        [102.0, 100.7, 101.7, 100.7, 102.0]
    """
    n = len(track)
    if n <= window_size:
        return list(track)

    start_time = time.time()
    elevations = np.asarray(elevations_of(track), dtype=float)
    half_window = window_size // 2

    smoothed = []
    for i, point in enumerate(track):
        start_idx = max(0, i - half_window)
        end_idx = min(n - 1, i + half_window)
        smoothed.append(point.with_elevation(float(elevations[start_idx : end_idx + 1].mean())))

    elapsed = time.time() - start_time
    logger.debug(f"Höhen geglättet ({n} Punkte, Fenster {window_size}) in {elapsed:.3f}s")

    return smoothed


def calculate_total_elevation_changes(
    elevations: Sequence[float], min_elevation_diff: float = 3.0
) -> ElevationChanges:
    """Berechnet Anstieg und Abstieg mit Schwellwert-Hysterese.

    Kleine Änderungen werden in getrennten Akkumulatoren für Anstieg und
    Abstieg gesammelt und erst gezählt, wenn sie den Schwellwert erreichen.
    Ein Richtungswechsel verwirft die noch nicht gezählte Akkumulation der
    Gegenrichtung. Reste ab Schwellwert werden am Ende noch gezählt.

    Args:
        elevations: Höhenwerte in Metern in Track-Reihenfolge.
        min_elevation_diff: Minimaler Höhenunterschied in Metern der gezählt wird (Default: 3m).

    Returns:
        ElevationChanges(total_gain, total_loss) in Metern.

    Example:
        >>> calculate_total_elevation_changes([0, 1, 2, 3, 4, 5, 6, 7, 8, 9], 3.0)
        ElevationChanges(total_gain=9.0, total_loss=0.0)
        >>> calculate_total_elevation_changes([0, 2, 0, 2, 0, 2], 3.0)
        ElevationChanges(total_gain=0.0, total_loss=0.0)
    """
    total_gain = 0.0
    total_loss = 0.0

    if len(elevations) < 2:
        return ElevationChanges(total_gain, total_loss)

    gain_acc = 0.0
    loss_acc = 0.0

    for prev, current in zip(elevations, elevations[1:]):
        diff = current - prev

        if diff > 0:
            gain_acc += diff
            if gain_acc >= min_elevation_diff:
                total_gain += gain_acc
                gain_acc = 0.0
            loss_acc = 0.0
        elif diff < 0:
            loss_acc += -diff
            if loss_acc >= min_elevation_diff:
                total_loss += loss_acc
                loss_acc = 0.0
            gain_acc = 0.0

    # Restakkumulation am Ende
    if gain_acc >= min_elevation_diff:
        total_gain += gain_acc
    if loss_acc >= min_elevation_diff:
        total_loss += loss_acc

    return ElevationChanges(total_gain, total_loss)
