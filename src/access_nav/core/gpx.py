"""GPX export of scored routes and GPX track import."""

from typing import Optional

import gpxpy
import gpxpy.gpx

from ..models import GeoPoint, RouteResult
from ..settings import settings


def route_to_gpx(
    route: RouteResult,
    name: str = "Wheelchair Route",
    placeholder_elevation: Optional[float] = None,
) -> str:
    """Serialize a route as a single-track GPX document.

    One ``<trkpt>`` is written per segment coordinate, in order, each with a
    placeholder elevation.
    """
    elevation = (
        settings.gpx_placeholder_elevation_m if placeholder_elevation is None
        else placeholder_elevation
    )
    gpx = gpxpy.gpx.GPX()
    gpx.creator = "access-nav"
    gpx.name = name
    gpx.description = "Route calculated for wheelchair accessibility"

    track = gpxpy.gpx.GPXTrack(name=name)
    track.type = "wheelchair_accessible"
    segment = gpxpy.gpx.GPXTrackSegment()
    for seg in route.segments:
        for point in seg.coordinates:
            segment.points.append(gpxpy.gpx.GPXTrackPoint(
                latitude=point.lat, longitude=point.lon, elevation=elevation,
            ))
    track.segments.append(segment)
    gpx.tracks.append(track)
    return gpx.to_xml(version="1.1")


def parse_gpx_path(filepath: str) -> dict:
    """Read the first track with at least two points from a GPX file."""
    with open(filepath, "r") as f:
        gpx = gpxpy.parse(f)

    for track in gpx.tracks:
        points = [
            GeoPoint(lat=point.latitude, lon=point.longitude)
            for segment in track.segments
            for point in segment.points
        ]
        if len(points) >= 2:
            return {"name": track.name or "Unnamed Track", "points": points}
    return {"name": None, "points": []}
