"""Walking-route lookup via an OSRM server, with a synthetic fallback path."""

import logging

import httpx

from ..models import GeoPoint
from ..settings import settings
from .geo import distance
from .models import ProviderPath

logger = logging.getLogger(__name__)

FALLBACK_STEPS = 12
DETOUR_PENALTY = 1.25


def synthesize_fallback_path(start: GeoPoint, end: GeoPoint) -> ProviderPath:
    """Build an L-shaped path: north/south to the mid latitude, then east/west.

    The first leg holds longitude fixed for ``FALLBACK_STEPS`` steps, the
    second holds latitude fixed for ``FALLBACK_STEPS`` steps, and ``end`` is
    appended. Reported distance is the straight line plus a detour penalty.
    """
    mid_lat = (start.lat + end.lat) / 2
    points = [start]
    for i in range(1, FALLBACK_STEPS + 1):
        t = i / FALLBACK_STEPS
        points.append(GeoPoint(lat=start.lat + (mid_lat - start.lat) * t, lon=start.lon))
    for i in range(1, FALLBACK_STEPS + 1):
        t = i / FALLBACK_STEPS
        points.append(GeoPoint(lat=mid_lat, lon=start.lon + (end.lon - start.lon) * t))
    points.append(end)
    return ProviderPath(
        points=points,
        distance_m=distance(start, end) * DETOUR_PENALTY,
        source="fallback",
    )


def _parse_osrm_route(data: dict) -> ProviderPath:
    """Extract the first route; raises KeyError/TypeError/ValueError when malformed."""
    route = data["routes"][0]
    coords = route["geometry"]["coordinates"]
    # GeoJSON order is [lon, lat]
    points = [GeoPoint(lat=float(c[1]), lon=float(c[0])) for c in coords]
    if len(points) < 2:
        raise ValueError(f"route geometry has {len(points)} point(s)")
    return ProviderPath(points=points, distance_m=float(route["distance"]), source="provider")


async def fetch_walking_route(start: GeoPoint, end: GeoPoint) -> ProviderPath:
    """Request a foot route from OSRM, falling back to a synthetic path on any failure."""
    url = (
        f"{settings.osrm_base_url.rstrip('/')}/route/v1/{settings.osrm_profile}/"
        f"{start.lon},{start.lat};{end.lon},{end.lat}"
    )
    params = {"overview": "full", "geometries": "geojson"}
    async with httpx.AsyncClient(
        timeout=settings.routing_timeout_s, headers={"User-Agent": settings.user_agent},
    ) as client:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return _parse_osrm_route(response.json())
        except httpx.TimeoutException as exc:
            logger.warning("Routing server timed out: %s", exc)
        except httpx.HTTPStatusError as exc:
            logger.warning("Routing server returned HTTP %s", exc.response.status_code)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Routing response malformed: %s", exc)
        except Exception as exc:
            logger.warning("Routing request failed: %s", exc)
    logger.info("Using fallback path from %s to %s", start.as_tuple(), end.as_tuple())
    return synthesize_fallback_path(start, end)
