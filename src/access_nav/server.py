"""MCP server for access-nav.

Registers all tools and runs via stdio transport.
"""

import json
import logging
import sys

from mcp.server.fastmcp import FastMCP

from .settings import settings
from .state import state, report_store
from .tools.route import register_route_tools
from .tools.search import register_search_tools
from .tools.hazards import register_hazard_tools
from .tools.reports import register_report_tools
from .tools.export import register_export_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "access-nav",
    instructions=(
        "Plan wheelchair-accessible routes, flag barriers such as stairs, potholes "
        "and broken ramps, and collect user issue reports"
    ),
)

# Register all tool groups
register_route_tools(mcp)
register_search_tools(mcp)
register_hazard_tools(mcp)
register_report_tools(mcp)
register_export_tools(mcp)
register_status_tools(mcp)


@mcp.resource("state://session")
def session_state() -> str:
    """Current session summary as JSON."""
    return json.dumps(state.summary(report_store), indent=2)


def main():
    # stdout carries the MCP stdio transport
    logging.basicConfig(
        level=settings.log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
