"""Accessibility hazard ingestion from OpenStreetMap via the Overpass API."""

import logging
from typing import Optional

import httpx

from ..models import GeoPoint, HazardPoint, Severity
from ..settings import settings

logger = logging.getLogger(__name__)

MAX_HAZARD_RADIUS_M = 20_000


async def _query_overpass(query: str) -> list[dict]:
    """Execute an Overpass API query with server fallback."""
    async with httpx.AsyncClient(
        timeout=settings.overpass_timeout_s, headers={"User-Agent": settings.user_agent},
    ) as client:
        for server in settings.overpass_servers:
            try:
                response = await client.post(server, data={"data": query})
                response.raise_for_status()
                data = response.json()
                return data.get("elements", [])
            except httpx.TimeoutException as exc:
                logger.warning("Overpass server %s timed out: %s", server, exc)
                continue
            except httpx.HTTPStatusError as exc:
                logger.warning(
                    "Overpass server %s returned HTTP %s", server, exc.response.status_code
                )
                continue
            except Exception as exc:
                logger.warning("Overpass server %s failed: %s", server, exc)
                continue
    logger.warning("All Overpass servers failed for query")
    return []


def build_hazard_query(center: GeoPoint, radius_m: float) -> str:
    around = f"around:{radius_m:.0f},{center.lat},{center.lon}"
    selectors = [
        '["highway"="steps"]',
        '["highway"="construction"]',
        '["surface"="unpaved"]',
        '["surface"="gravel"]',
        '["smoothness"="bad"]',
        '["smoothness"="very_bad"]',
        '["highway"="living_street"]',
        '["highway"="service"]["width"]',
    ]
    body = "".join(f"way{sel}({around});" for sel in selectors)
    return f"[out:json][timeout:25];({body});out center;"


def map_tags(tags: dict) -> Optional[tuple[Severity, str, str]]:
    """Map OSM tags to (severity, category, description); None if unmapped."""
    highway = tags.get("highway")
    surface = tags.get("surface")
    smoothness = tags.get("smoothness")
    if highway == "steps":
        return "hazard", "Stairs", "Stairs detected, not wheelchair accessible"
    if highway == "construction":
        return "hazard", "Construction", "Road under construction"
    if surface in ("unpaved", "gravel"):
        return "hazard", "Unpaved", f"Surface: {surface}"
    if smoothness in ("bad", "very_bad"):
        return "hazard", "Poor Surface", f"Smoothness: {smoothness}"
    if highway == "living_street":
        return "caution", "Narrow Alley", "Narrow living street, limited wheelchair access"
    if highway == "service":
        return "caution", "Service Road", "Service road, may be narrow"
    return None


def _element_location(element: dict) -> Optional[tuple[float, float]]:
    center = element.get("center") or {}
    lat = center.get("lat", element.get("lat"))
    lon = center.get("lon", element.get("lon"))
    if lat is None or lon is None:
        return None
    return float(lat), float(lon)


def parse_hazards(elements: list[dict]) -> list[HazardPoint]:
    """Convert Overpass elements into hazard points, skipping unmapped ones."""
    hazards = []
    for elem in elements:
        location = _element_location(elem)
        if location is None:
            continue
        mapped = map_tags(elem.get("tags", {}))
        if mapped is None:
            continue
        severity, category, description = mapped
        hazards.append(HazardPoint(
            lat=location[0],
            lon=location[1],
            severity=severity,
            category=category,
            description=description,
        ))
    return hazards


async def fetch_osm_hazards(center: GeoPoint, radius_m: Optional[float] = None) -> list[HazardPoint]:
    """Fetch mapped accessibility hazards around a point.

    Raises ``ValueError`` for an out-of-range radius. Provider failures
    return [].
    """
    if radius_m is None:
        radius_m = settings.hazard_radius_m
    if not 0 < radius_m <= MAX_HAZARD_RADIUS_M:
        raise ValueError(f"radius_m must be in (0, {MAX_HAZARD_RADIUS_M}], got {radius_m}")
    elements = await _query_overpass(build_hazard_query(center, radius_m))
    try:
        hazards = parse_hazards(elements)
    except (AttributeError, TypeError, ValueError) as exc:
        logger.warning("Overpass response malformed: %s", exc)
        return []
    logger.info("Ingested %d hazard(s) from %d OSM element(s)", len(hazards), len(elements))
    return hazards
