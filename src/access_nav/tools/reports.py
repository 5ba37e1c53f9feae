"""Issue report tools: create_report, delete_report, list_reports."""

import json

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import report_store
from ..models import IssueType


def register_report_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def create_report(
        lat: float,
        lng: float,
        type: str,
        description: str,
        photo_url: str | None = None,
        owner_id: str | None = None,
    ) -> str:
        """Report an accessibility issue at a location.

        The report counts as a hazard for route scoring until it expires
        (48 hours by default).

        Args:
            lat: Latitude of the issue.
            lng: Longitude of the issue.
            type: One of blocked_path, broken_ramp, pothole, wet_floor,
                no_elevator, other.
            description: What is wrong (required).
            photo_url: Optional link to a photo.
            owner_id: Optional identifier of the reporting user.
        """
        try:
            report = report_store.create(
                lat=lat, lng=lng, type=type, description=description,
                photo_url=photo_url, owner_id=owner_id,
            )
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
            valid = ", ".join(t.value for t in IssueType)
            return f"Error: Invalid report ({fields or 'input'}). Valid types: {valid}."
        if report is None:
            return "Error: Report could not be saved. Try again later."
        return (
            f"Report {report.id} created: {report.type.value} at "
            f"{report.lat:.5f}, {report.lng:.5f} (expires {report.expires_at:%Y-%m-%d %H:%M} UTC)"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def delete_report(report_id: str, requester_id: str | None = None) -> str:
        """Delete an issue report by id.

        Args:
            report_id: The id returned by create_report or list_reports.
            requester_id: Identifier of the user asking for deletion.
        """
        if report_store.delete(report_id, requester_id=requester_id):
            return f"Report {report_id} deleted."
        return f"Error: Report {report_id} not found or cannot be deleted."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_reports() -> str:
        """List all active (unexpired) issue reports as JSON, newest first."""
        reports = report_store.list()
        reports.sort(key=lambda r: r.created_at, reverse=True)
        return json.dumps([r.model_dump(mode="json") for r in reports], indent=2)
