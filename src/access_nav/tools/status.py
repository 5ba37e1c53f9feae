"""Status tool: get_status."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state, report_store


def register_status_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the current navigation session.

        Shows the start and end points, the last planned route, and how many
        hazards and active reports are known.
        """
        return json.dumps(state.summary(report_store), indent=2)
