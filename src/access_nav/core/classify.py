"""Proximity-based accessibility classification of route chunks."""

from typing import Iterable, Sequence

from ..models import Accessibility, GeoPoint, HazardPoint, Severity, SEVERITY_ORDER
from .geo import distance

PROXIMITY_THRESHOLD_M = 30.0

_TAG_FOR_SEVERITY: dict[Severity, Accessibility] = {
    "hazard": "hazard",
    "caution": "caution",
    "info": "safe",
}


def by_severity(hazards: Iterable[HazardPoint]) -> list[HazardPoint]:
    """Order hazards hazard -> caution -> info, stable within each severity."""
    rank = {sev: i for i, sev in enumerate(SEVERITY_ORDER)}
    return sorted(hazards, key=lambda h: rank[h.severity])


def classify_chunk(
    chunk: Sequence[GeoPoint],
    hazards: Iterable[HazardPoint],
    threshold_m: float = PROXIMITY_THRESHOLD_M,
) -> Accessibility:
    """Tag a chunk by the most severe hazard closer than ``threshold_m``.

    Hazards are visited in severity order and the first one within range of
    any chunk point decides the tag, so a barrier always outranks a nearby
    ramp or bench. No hazard in range means ``safe``.
    """
    for hazard in by_severity(hazards):
        location = hazard.location
        for point in chunk:
            if distance(point, location) < threshold_m:
                return _TAG_FOR_SEVERITY[hazard.severity]
    return "safe"
