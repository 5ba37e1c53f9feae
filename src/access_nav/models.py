"""Pydantic domain models for hazards, issue reports and scored routes."""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator, model_validator

Severity = Literal["hazard", "caution", "info"]
Accessibility = Literal["safe", "caution", "hazard"]

# Fixed severity order used for every aggregate computation.
ACCESSIBILITY_ORDER: tuple[Accessibility, ...] = ("hazard", "caution", "safe")
SEVERITY_ORDER: tuple[Severity, ...] = ("hazard", "caution", "info")


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lon)


class HazardPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    severity: Severity
    category: str
    description: str = ""

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lon=self.lon)


class IssueType(str, Enum):
    BLOCKED_PATH = "blocked_path"
    BROKEN_RAMP = "broken_ramp"
    POTHOLE = "pothole"
    WET_FLOOR = "wet_floor"
    NO_ELEVATOR = "no_elevator"
    OTHER = "other"


class IssueReport(BaseModel):
    """A user-submitted barrier report.

    Field names follow the persisted report schema (``lng``, ``type``,
    ``photo_url``) so the store can dump and load records directly.
    """

    id: str
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    type: IssueType
    description: str = Field(min_length=1)
    photo_url: Optional[str] = None
    owner_id: Optional[str] = None
    created_at: AwareDatetime
    expires_at: Optional[AwareDatetime] = None

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v: str) -> str:
        if not isinstance(v, str):
            raise ValueError("Description must be a string")
        return v.strip()

    @model_validator(mode="after")
    def check_expiry_after_creation(self) -> "IssueReport":
        if self.expires_at is not None and self.expires_at <= self.created_at:
            raise ValueError("expires_at must be later than created_at")
        return self

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lon=self.lng)

    def is_active(self, now: datetime) -> bool:
        return self.expires_at is None or now < self.expires_at

    def as_hazard(self) -> HazardPoint:
        return HazardPoint(
            lat=self.lat,
            lon=self.lng,
            severity="hazard",
            category=self.type.value,
            description=self.description,
        )


class RouteSegment(BaseModel):
    coordinates: list[GeoPoint] = Field(min_length=2)
    accessibility: Accessibility
    surface: Optional[str] = None
    description: Optional[str] = None


class ElevationSample(BaseModel):
    distance: float = Field(ge=0)
    elevation: float


class RouteResult(BaseModel):
    segments: list[RouteSegment] = []
    total_distance_m: float = Field(ge=0)
    estimated_time_s: float = Field(ge=0)
    warnings: list[str] = []
    elevation_profile: Optional[list[ElevationSample]] = None
    source: Literal["provider", "fallback", "gpx"] = "provider"

    def counts(self) -> dict[str, int]:
        counts = {tag: 0 for tag in ACCESSIBILITY_ORDER}
        for seg in self.segments:
            counts[seg.accessibility] += 1
        return counts

    def breakdown(self) -> dict[str, float]:
        """Percentage of segments per accessibility tag, by segment count."""
        counts = self.counts()
        n = len(self.segments)
        if n == 0:
            return {tag: 0.0 for tag in ACCESSIBILITY_ORDER}
        return {tag: counts[tag] * 100.0 / n for tag in ACCESSIBILITY_ORDER}

    def path(self) -> list[GeoPoint]:
        """Rebuild the full path, dropping the boundary point shared by neighbours."""
        points: list[GeoPoint] = []
        for i, seg in enumerate(self.segments):
            points.extend(seg.coordinates if i == 0 else seg.coordinates[1:])
        return points

    def summary(self) -> dict:
        return {
            "source": self.source,
            "segments": len(self.segments),
            "total_distance_m": round(self.total_distance_m, 1),
            "estimated_time_s": round(self.estimated_time_s, 1),
            "breakdown_pct": {k: round(v, 1) for k, v in self.breakdown().items()},
            "warnings": self.warnings,
        }


class SearchResult(BaseModel):
    name: str
    display_name: str
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    place_type: str = "place"
    accessibility_score: int = Field(default=5, ge=0, le=10)

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lon=self.lon)
