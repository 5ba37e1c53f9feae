"""Session state for the access-nav MCP server.

Holds the chosen start/end points, the last applied route, pending search
results, hazards ingested from OSM, and the request ordering helpers.
"""

from datetime import timedelta
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from access_nav.core.hazards import HazardCatalog
from access_nav.core.reports import IssueReportStore
from access_nav.core.geocode import ReverseGeocoder
from access_nav.core.seed import campus_access_points
from access_nav.core.sequencing import Debouncer, RouteRequestTracker
from access_nav.models import GeoPoint, HazardPoint, RouteResult, SearchResult
from access_nav.settings import settings

SearchField = Literal["start", "end"]


class RoutePoint(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    location: Optional[GeoPoint] = None
    label: str = ""

    @property
    def is_set(self) -> bool:
        return self.location is not None


class SessionState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    start: RoutePoint = Field(default_factory=RoutePoint)
    end: RoutePoint = Field(default_factory=RoutePoint)
    route: Optional[RouteResult] = None
    static_hazards: list[HazardPoint] = Field(default_factory=campus_access_points)
    osm_hazards: list[HazardPoint] = []
    pending_search_results: dict[str, list[SearchResult]] = {}
    route_requests: RouteRequestTracker = Field(default_factory=RouteRequestTracker)
    search_debouncer: Debouncer = Field(
        default_factory=lambda: Debouncer(settings.search_debounce_s)
    )
    reverse_geocoder: ReverseGeocoder = Field(default_factory=ReverseGeocoder)

    def point(self, field: SearchField) -> RoutePoint:
        return self.start if field == "start" else self.end

    def catalog(self, reports: Optional[IssueReportStore] = None) -> HazardCatalog:
        return HazardCatalog(
            static_points=self.static_hazards,
            reports=reports,
            provider_points=self.osm_hazards,
        )

    def summary(self, reports: Optional[IssueReportStore] = None) -> dict:
        def _point(p: RoutePoint) -> dict:
            if not p.is_set:
                return {"set": False}
            return {"set": True, "lat": p.location.lat, "lon": p.location.lon, "label": p.label}

        return {
            "start": _point(self.start),
            "end": _point(self.end),
            "route": self.route.summary() if self.route else None,
            "hazards": {
                "static": len(self.static_hazards),
                "osm": len(self.osm_hazards),
                "active_reports": len(reports.list()) if reports else 0,
            },
            "route_generation": self.route_requests.latest,
        }


# Global session state and report store, one per MCP server process
state = SessionState()
report_store = IssueReportStore(
    Path(settings.reports_path).expanduser(),
    ttl=timedelta(hours=settings.report_ttl_hours),
)
