"""Data models for Route Elevation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Annotated, Literal, NamedTuple, Union

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class TrackPoint:
    """Single recorded point of a route.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        elevation: Elevation in meters.
    """

    latitude: float
    longitude: float
    elevation: float

    def is_finite(self) -> bool:
        """Returns True if latitude, longitude and elevation are all finite."""
        return all(math.isfinite(v) for v in (self.latitude, self.longitude, self.elevation))

    def with_elevation(self, elevation: float) -> TrackPoint:
        """Returns a copy of the point with a different elevation."""
        return replace(self, elevation=elevation)


class ElevationChanges(NamedTuple):
    """Total gain and loss in meters from the hysteresis accumulator."""

    total_gain: float
    total_loss: float


class KilometerSegment(BaseModel):
    """Statistics of one distance-bounded slice of a track.

    Attributes:
        label: Distance range of the segment, e.g. "0-1 km".
        elevation_gain: Gain within the segment in meters.
        elevation_loss: Loss within the segment in meters.
        net_elevation: Gain minus loss in meters.
        grade_percent: Net elevation over segment distance in percent.
        end_elevation: Elevation at the last point of the segment in meters.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    elevation_gain: float
    elevation_loss: float
    net_elevation: float
    grade_percent: float
    end_elevation: float


@dataclass
class Segmentation:
    """Output of the segmenter.

    Attributes:
        segments: Segments in walking order.
        total_distance_m: Walked distance of the whole track in meters.
        raw_grades: Unrounded grade of each segment in percent.
    """

    segments: list[KilometerSegment] = field(default_factory=list)
    total_distance_m: float = 0.0
    raw_grades: list[float] = field(default_factory=list)


class _AnalysisBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str | None = None
    km_segments: list[KilometerSegment] = Field(default_factory=list)
    total_distance_km: float = 0.0
    total_elevation_gain: float = 0.0
    total_elevation_loss: float = 0.0
    net_elevation: float = 0.0
    avg_elevation_gain_per_segment: float = 0.0
    overall_grade_percent: float = 0.0
    start_elevation: float = 0.0
    end_elevation: float = 0.0


class ElevationAnalysisResult(_AnalysisBase):
    """Successful elevation analysis of a track.

    Attributes:
        status: Always "ok".
        filename: Name of the analyzed file, if known.
        km_segments: Per-segment breakdown in walking order.
        total_distance_km: Walked distance in kilometers (2 decimals).
        total_elevation_gain: Whole-track gain in meters.
        total_elevation_loss: Whole-track loss in meters.
        net_elevation: Gain minus loss in meters.
        avg_elevation_gain_per_segment: Whole-track gain divided by segment count.
        overall_grade_percent: Net elevation over total distance in percent.
        start_elevation: Elevation of the first point of the working track.
        end_elevation: Elevation of the last point of the working track.
        median_gradient: Median of the segment grades in percent.
        min_gradient: Smallest segment grade in percent.
        max_gradient: Largest segment grade in percent.
    """

    status: Literal["ok"] = "ok"
    median_gradient: float | None = None
    min_gradient: float | None = None
    max_gradient: float | None = None

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None


class ElevationAnalysisFailure(_AnalysisBase):
    """Failed elevation analysis.

    All numeric fields stay at 0 and ``km_segments`` stays empty; consumers
    branch on ``status`` (or ``ok``) before reading any statistics.

    Attributes:
        status: Always "error".
        error: Human readable cause of the failure.
    """

    status: Literal["error"] = "error"
    error: str

    @property
    def ok(self) -> bool:
        return False


AnalysisOutcome = Annotated[
    Union[ElevationAnalysisResult, ElevationAnalysisFailure],
    Field(discriminator="status"),
]
