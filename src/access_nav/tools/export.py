"""Export tools: export_gpx, score_gpx_route."""

import logging
import os
from pathlib import Path

import gpxpy.gpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..core.gpx import parse_gpx_path, route_to_gpx
from ..core.scoring import score_route
from ..state import state, report_store
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    resolved = Path(output_path).resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def register_export_tools(mcp: FastMCP):

    @mcp.tool()
    def export_gpx(output_path: str) -> str:
        """Export the planned route as a GPX track.

        Writes one track point per route coordinate, in order.
        **Requires:** plan_route first.

        Args:
            output_path: Where to save the .gpx file (absolute path)
        """
        try:
            require_state(state, route=True)
        except ValueError as e:
            return f"Error: {e}"

        try:
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        xml = route_to_gpx(state.route)
        with open(output_path, "w") as f:
            f.write(xml)
        n_points = sum(len(s.coordinates) for s in state.route.segments)
        logger.info("GPX exported to %s", output_path)
        return f"GPX exported to {output_path} ({n_points} track points)"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def score_gpx_route(file_path: str) -> str:
        """Score a recorded GPX track for wheelchair accessibility.

        The first track with at least two points is segmented and classified
        against current hazards and reports, and becomes the session route.
        **Next:** get_route for details.

        Args:
            file_path: Absolute path to a .gpx file.
        """
        try:
            track = parse_gpx_path(file_path)
        except (OSError, gpxpy.gpx.GPXException) as e:
            return f"Error: Could not read GPX file: {e}"
        if not track["points"]:
            return "Error: GPX file has no track with at least two points."

        hazards = state.catalog(report_store).active_hazards()
        result = score_route(track["points"], hazards, source="gpx")
        state.route = result
        state.route_requests.issue()
        return (
            f"GPX track '{track['name']}' scored: {result.total_distance_m:.0f}m, "
            f"{len(result.segments)} segments. Warnings: {' | '.join(result.warnings)}"
        )
