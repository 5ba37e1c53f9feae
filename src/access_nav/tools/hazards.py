"""Hazard tools: fetch_hazards, list_hazards."""

import json
import logging
from collections import Counter

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..core.osm import MAX_HAZARD_RADIUS_M, fetch_osm_hazards
from ..core.seed import CAMPUS_CENTER
from ..state import state, report_store

logger = logging.getLogger(__name__)


def register_hazard_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def fetch_hazards(radius_m: float | None = None) -> str:
        """Fetch stairs, construction, rough surfaces and narrow streets from OpenStreetMap.

        Searches around the start point (or the campus center if no start
        is set) and adds the results to the hazards used by plan_route.
        **Next:** plan_route to re-score with the new hazards.

        Args:
            radius_m: Search radius in meters, up to 20000 (default from
                settings, 3000).
        """
        if radius_m is not None and not 0 < radius_m <= MAX_HAZARD_RADIUS_M:
            return f"Error: radius_m must be greater than 0 and at most {MAX_HAZARD_RADIUS_M} meters."
        center = state.start.location if state.start.is_set else CAMPUS_CENTER
        hazards = await fetch_osm_hazards(center, radius_m)
        state.osm_hazards = hazards

        if not hazards:
            logger.debug("fetch_hazards returned zero results around %s", center.as_tuple())
            return "Hazards fetched: none found (check server logs if unexpected)."
        counts = Counter(h.category for h in hazards)
        return f"Hazards fetched: {len(hazards)} ({dict(counts)})"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_hazards() -> str:
        """List every currently active hazard point as JSON.

        Includes campus accessibility points, fetched OSM hazards and
        unexpired issue reports, in that order.
        """
        hazards = state.catalog(report_store).active_hazards()
        return json.dumps([h.model_dump() for h in hazards], indent=2)
