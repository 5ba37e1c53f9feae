"""Place lookup tools: search_places, select_search_result, reverse_geocode."""

from typing import Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..core.geocode import search_places as do_search_places
from ..models import GeoPoint
from ..state import state
from .route import _set_point


def register_search_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def search_places(
        query: str,
        field: Literal["start", "end"] = "start",
        limit: int = 5,
        viewbox: list[float] | None = None,
    ) -> str:
        """Search for a place to use as the start or end point.

        Campus places (library, gates, blocks) are matched first; other
        queries go to OpenStreetMap Nominatim. Rapid repeated searches for the
        same field are debounced: only the last one runs.

        - 1 result: the point is set automatically.
        - 2+ results: returns a numbered list. Ask the user to pick one, then
          call select_search_result with that number and the same field.

        Args:
            query: Place name (at least 2 characters).
            field: Which endpoint the result is for: 'start' or 'end'.
            limit: Maximum number of results from Nominatim (1-10).
            viewbox: Optional [west, north, east, south] box in degrees that
                limits Nominatim results to that area.
        """
        if viewbox is not None and len(viewbox) != 4:
            return "Error: viewbox must be [west, north, east, south]."
        bounds = tuple(viewbox) if viewbox is not None else None
        results = await state.search_debouncer.run(
            field, lambda: do_search_places(query, limit=limit, viewbox=bounds)
        )
        if results is None:
            return "Search superseded by a newer search for the same field."
        if not results:
            return f"No places found for '{query}'. Try a more specific name."

        if len(results) == 1:
            r = results[0]
            _set_point(field, r.lat, r.lon, r.name)
            state.pending_search_results.pop(field, None)
            return f"Found 1 result: '{r.display_name}' (auto-selected as {field})."

        state.pending_search_results[field] = results
        lines = [f"Found {len(results)} place(s) for '{query}':"]
        for i, r in enumerate(results, 1):
            lines.append(
                f"{i}. {r.name} ({r.place_type}), {r.display_name}\n"
                f"   {r.lat:.5f}, {r.lon:.5f} | accessibility {r.accessibility_score}/10"
            )
        lines.append(
            f"Ask the user which number (1-{len(results)}) to use, then call "
            f"select_search_result(number, field='{field}')."
        )
        return "\n".join(lines)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def select_search_result(number: int, field: Literal["start", "end"] = "start") -> str:
        """Use a numbered search result as the start or end point.

        **Requires:** search_places returned multiple results for this field.
        **Next:** plan_route once both points are set.

        Args:
            number: 1-based index of the chosen result.
            field: 'start' or 'end', matching the search.
        """
        results = state.pending_search_results.get(field)
        if not results:
            return f"Error: No pending search results for {field}. Call search_places first."
        if number < 1 or number > len(results):
            return f"Error: Invalid selection {number}. Choose a number between 1 and {len(results)}."

        r = results[number - 1]
        _set_point(field, r.lat, r.lon, r.name)
        del state.pending_search_results[field]
        return f"{field.capitalize()} set to '{r.display_name}' ({r.lat:.5f}, {r.lon:.5f})."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
    async def reverse_geocode(lat: float, lon: float) -> str:
        """Describe a coordinate with the nearest address or place name.

        Falls back to the formatted coordinates when the lookup fails or is
        rate-limited.
        """
        try:
            point = GeoPoint(lat=lat, lon=lon)
        except ValueError as e:
            return f"Error: Invalid coordinates: {e}"
        return await state.reverse_geocoder.lookup(point)
