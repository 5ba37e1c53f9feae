"""End-to-end route planning: provider path, active hazards, scoring."""

import logging
from datetime import datetime
from typing import Literal, Optional

from ..models import GeoPoint, RouteResult
from .elevation import synthetic_profile, terrain_profile
from .hazards import HazardCatalog
from .routing import fetch_walking_route
from .scoring import score_route

logger = logging.getLogger(__name__)

ElevationMode = Literal["synthetic", "terrain", "none"]


async def plan_route(
    start: GeoPoint,
    end: GeoPoint,
    catalog: HazardCatalog,
    elevation: ElevationMode = "synthetic",
    now: Optional[datetime] = None,
) -> RouteResult:
    """Plan and score a route. Always returns a usable result.

    A routing failure only degrades the path to the synthetic fallback.
    """
    path = await fetch_walking_route(start, end)
    hazards = catalog.active_hazards(now)

    profile = None
    if elevation == "synthetic":
        profile = synthetic_profile(len(path.points), path.distance_m)
    elif elevation == "terrain":
        profile = await terrain_profile(path.points, path.distance_m)

    result = score_route(
        path.points, hazards,
        reported_distance_m=path.distance_m,
        elevation_profile=profile,
        source=path.source,
    )
    logger.info(
        "Route planned (%s): %d segments, %.0fm, %d hazard(s) considered",
        result.source, len(result.segments), result.total_distance_m, len(hazards),
    )
    return result
