"""Merged view over static accessibility points and user issue reports."""

from datetime import datetime
from typing import Iterable, Optional

from ..models import HazardPoint
from .reports import IssueReportStore


class HazardCatalog:
    """Read-only union of static points, provider points and active reports.

    Iteration order is static seed, then provider-ingested points, then
    reports. Duplicate coordinates are kept.
    """

    def __init__(
        self,
        static_points: Iterable[HazardPoint] = (),
        reports: Optional[IssueReportStore] = None,
        provider_points: Iterable[HazardPoint] = (),
    ):
        self.static_points = list(static_points)
        self.provider_points = list(provider_points)
        self.reports = reports

    def active_hazards(self, now: Optional[datetime] = None) -> list[HazardPoint]:
        hazards = self.static_points + self.provider_points
        if self.reports is not None:
            hazards += [r.as_hazard() for r in self.reports.list(now)]
        return hazards
