"""Route tools: set_start, set_end, swap_points, clear_route, plan_route, get_route."""

import json
import logging
from typing import Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..core.planner import plan_route as do_plan_route
from ..models import GeoPoint
from ..state import state, report_store, RoutePoint, SearchField
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def _set_point(field: SearchField, lat: float, lon: float, label: str = "") -> RoutePoint:
    """Validate and store a route endpoint, invalidating the current route."""
    location = GeoPoint(lat=lat, lon=lon)
    point = RoutePoint(location=location, label=label or f"{lat:.5f}, {lon:.5f}")
    if field == "start":
        state.start = point
    else:
        state.end = point
    state.route = None
    # Endpoints changed, so any route still in flight is stale
    state.route_requests.issue()
    return point


def register_route_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_start(lat: float, lon: float, label: str = "") -> str:
        """Set the route start point (marker A).

        **Prior:** If you only have a place name, call search_places first.
        **Next:** set_end, then plan_route.

        Args:
            lat: Latitude in degrees (-90..90).
            lon: Longitude in degrees (-180..180).
            label: Optional human-readable name for the point.
        """
        try:
            point = _set_point("start", lat, lon, label)
        except ValueError as e:
            return f"Error: Invalid start coordinates: {e}"
        return f"Start set: {point.label} ({lat:.6f}, {lon:.6f})"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_end(lat: float, lon: float, label: str = "") -> str:
        """Set the route destination (marker B).

        **Next:** plan_route.

        Args:
            lat: Latitude in degrees (-90..90).
            lon: Longitude in degrees (-180..180).
            label: Optional human-readable name for the point.
        """
        try:
            point = _set_point("end", lat, lon, label)
        except ValueError as e:
            return f"Error: Invalid end coordinates: {e}"
        return f"End set: {point.label} ({lat:.6f}, {lon:.6f})"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def swap_points() -> str:
        """Swap start and end points. Clears the current route."""
        state.start, state.end = state.end, state.start
        state.route = None
        state.route_requests.issue()
        return "Start and end swapped. Run plan_route to recompute."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def clear_route() -> str:
        """Clear start, end and the planned route."""
        state.start = RoutePoint()
        state.end = RoutePoint()
        state.route = None
        state.route_requests.issue()
        return "Route cleared."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def plan_route(elevation: Literal["synthetic", "terrain", "none"] = "synthetic") -> str:
        """Plan a wheelchair route between the start and end points.

        Asks the routing service for a walking path (a synthetic L-shaped
        path is used if it is unavailable), splits it into segments, tags
        each segment safe / caution / hazard from nearby hazards and active
        issue reports, and estimates travel time.

        **Requires:** set_start and set_end (or select_search_result for both).
        **Next:** get_route for details, export_gpx to save it.

        Args:
            elevation: 'synthetic' placeholder profile (default), 'terrain'
                to sample real elevation tiles, or 'none'.
        """
        try:
            require_state(state, start=True, end=True)
        except ValueError as e:
            return f"Error: {e}"

        generation = state.route_requests.issue()
        result = await do_plan_route(
            state.start.location, state.end.location,
            state.catalog(report_store), elevation=elevation,
        )
        if not state.route_requests.is_current(generation):
            logger.warning(
                "Discarding stale route request %d (latest is %d)",
                generation, state.route_requests.latest,
            )
            return "Route discarded: a newer route request was issued while this one was running."

        state.route = result
        breakdown = result.breakdown()
        note = " (routing service unavailable, approximate path)" if result.source == "fallback" else ""
        return (
            f"Route planned{note}: {result.total_distance_m:.0f}m, "
            f"~{result.estimated_time_s / 60:.1f} min, {len(result.segments)} segments "
            f"({breakdown['safe']:.0f}% safe, {breakdown['caution']:.0f}% caution, "
            f"{breakdown['hazard']:.0f}% hazard). "
            f"Warnings: {' | '.join(result.warnings)}"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_route(include_coordinates: bool = False) -> str:
        """Return the planned route as JSON.

        **Requires:** plan_route first.

        Args:
            include_coordinates: Include every segment coordinate and the
                elevation profile (can be large).
        """
        try:
            require_state(state, route=True)
        except ValueError as e:
            return f"Error: {e}"

        route = state.route
        data = route.summary()
        data["segments_detail"] = [
            {
                "accessibility": s.accessibility,
                "surface": s.surface,
                "description": s.description,
                "points": len(s.coordinates),
                **({"coordinates": [p.as_tuple() for p in s.coordinates]} if include_coordinates else {}),
            }
            for s in route.segments
        ]
        if include_coordinates and route.elevation_profile:
            data["elevation_profile"] = [e.model_dump() for e in route.elevation_profile]
        return json.dumps(data, indent=2)
