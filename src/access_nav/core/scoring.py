"""Aggregate classified chunks into a scored route."""

from typing import Optional, Sequence

from ..models import (
    Accessibility, ElevationSample, GeoPoint, HazardPoint, RouteResult, RouteSegment,
)
from .classify import classify_chunk
from .geo import path_length
from .segment import segment_path

# Speed multipliers relative to a 1.0 m/s nominal pace
SPEED_FACTORS: dict[Accessibility, float] = {"safe": 1.0, "caution": 0.65, "hazard": 0.35}
MIN_SPEED_FACTOR = 0.2

SURFACE_LABELS: dict[Accessibility, str] = {"safe": "Paved", "caution": "Unknown", "hazard": "Unknown"}
SEGMENT_DESCRIPTIONS: dict[Accessibility, str] = {
    "safe": "Clear accessible path",
    "caution": "Proceed carefully",
    "hazard": "Accessibility barrier",
}
GROUND_CHECK_ADVISORY = "Verify accessibility features on ground"


def speed_factor(segments: Sequence[RouteSegment]) -> float:
    n = len(segments)
    if n == 0:
        return 1.0
    factor = 0.0
    for tag, weight in SPEED_FACTORS.items():
        ratio = sum(1 for s in segments if s.accessibility == tag) / n
        factor += ratio * weight
    return max(factor, MIN_SPEED_FACTOR)


def estimate_time(distance_m: float, segments: Sequence[RouteSegment]) -> float:
    """Traversal time in seconds, weighting speed by segment counts per tag."""
    return distance_m / speed_factor(segments)


def build_warnings(segments: Sequence[RouteSegment]) -> list[str]:
    hazard_count = sum(1 for s in segments if s.accessibility == "hazard")
    caution_count = sum(1 for s in segments if s.accessibility == "caution")
    warnings = []
    if hazard_count:
        plural = "s" if hazard_count > 1 else ""
        warnings.append(f"{hazard_count} accessibility barrier{plural} on this route")
    if caution_count:
        plural = "s" if caution_count > 1 else ""
        warnings.append(f"{caution_count} caution area{plural} — proceed with care")
    warnings.append(GROUND_CHECK_ADVISORY)
    return warnings


def build_segment(chunk: list[GeoPoint], hazards: Sequence[HazardPoint]) -> RouteSegment:
    tag = classify_chunk(chunk, hazards)
    return RouteSegment(
        coordinates=chunk,
        accessibility=tag,
        surface=SURFACE_LABELS[tag],
        description=SEGMENT_DESCRIPTIONS[tag],
    )


def score_route(
    path: Sequence[GeoPoint],
    hazards: Sequence[HazardPoint],
    reported_distance_m: Optional[float] = None,
    elevation_profile: Optional[list[ElevationSample]] = None,
    source: str = "provider",
) -> RouteResult:
    """Segment, classify and summarise a path.

    Total distance is the provider-reported length when given, otherwise the
    haversine sum over the whole path (never over chunk boundaries, which
    would count shared points twice).
    """
    segments = [build_segment(chunk, hazards) for chunk in segment_path(path)]
    total = reported_distance_m if reported_distance_m is not None else path_length(path)
    return RouteResult(
        segments=segments,
        total_distance_m=total,
        estimated_time_s=estimate_time(total, segments),
        warnings=build_warnings(segments),
        elevation_profile=elevation_profile,
        source=source,
    )
