"""Place search and reverse geocoding against Nominatim."""

import logging
from typing import Optional

import httpx

from ..models import GeoPoint, SearchResult
from ..settings import settings
from .ratelimit import RateLimiter
from .seed import CAMPUS_PLACES

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


def search_campus(query: str, places: list[SearchResult] = CAMPUS_PLACES) -> list[SearchResult]:
    q = query.lower()
    return [p for p in places if q in p.name.lower() or q in p.display_name.lower()]


def _parse_search_item(item: dict) -> SearchResult:
    display_name = item.get("display_name") or ""
    return SearchResult(
        name=display_name.split(",")[0] or "Unknown",
        display_name=display_name,
        lat=float(item["lat"]),
        lon=float(item["lon"]),
        place_type=item.get("type") or "place",
    )


async def search_places(
    query: str,
    limit: int = 5,
    country: Optional[str] = None,
    viewbox: Optional[tuple[float, float, float, float]] = None,
) -> list[SearchResult]:
    """Find places matching ``query``; never raises.

    Campus places are matched locally first. Otherwise Nominatim is queried,
    optionally scoped by country code and a (west, north, east, south)
    viewbox. Any failure yields an empty list.
    """
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    local = search_campus(query)
    if local:
        return local

    params: dict = {"q": query, "format": "json", "limit": max(1, min(10, limit))}
    country = settings.search_country if country is None else country
    if country:
        params["countrycodes"] = country
    if viewbox:
        params["viewbox"] = ",".join(str(v) for v in viewbox)
        params["bounded"] = 1

    try:
        async with httpx.AsyncClient(
            timeout=settings.geocode_timeout_s, headers={"User-Agent": settings.user_agent},
        ) as client:
            response = await client.get(f"{settings.nominatim_url}/search", params=params)
            response.raise_for_status()
            items = response.json()
        return [_parse_search_item(item) for item in items]
    except httpx.HTTPStatusError as exc:
        logger.warning("Nominatim search returned HTTP %s", exc.response.status_code)
    except Exception as exc:
        logger.warning("Nominatim search for %r failed: %s", query, exc)
    return []


def format_coordinates(point: GeoPoint) -> str:
    return f"{point.lat:.4f}, {point.lon:.4f}"


class ReverseGeocoder:
    """Reverse geocoding with an instance-scoped cache and rate limiter."""

    def __init__(self, limiter: Optional[RateLimiter] = None):
        self.limiter = limiter or RateLimiter(settings.reverse_geocode_interval_s)
        self._cache: dict[tuple[float, float], str] = {}

    @staticmethod
    def _key(point: GeoPoint) -> tuple[float, float]:
        return (round(point.lat, 5), round(point.lon, 5))

    async def lookup(self, point: GeoPoint) -> str:
        key = self._key(point)
        if key in self._cache:
            return self._cache[key]
        # Nominatim usage policy allows one request per second
        if not self.limiter.try_acquire("nominatim"):
            logger.debug("Reverse geocode rate-limited for %s", key)
            return format_coordinates(point)

        params = {"format": "json", "lat": point.lat, "lon": point.lon, "zoom": 18}
        try:
            async with httpx.AsyncClient(
                timeout=settings.geocode_timeout_s, headers={"User-Agent": settings.user_agent},
            ) as client:
                response = await client.get(f"{settings.nominatim_url}/reverse", params=params)
                response.raise_for_status()
                name = response.json().get("display_name")
        except httpx.HTTPStatusError as exc:
            logger.warning("Nominatim reverse returned HTTP %s", exc.response.status_code)
            return format_coordinates(point)
        except Exception as exc:
            logger.warning("Nominatim reverse lookup failed: %s", exc)
            return format_coordinates(point)

        if not name:
            return format_coordinates(point)
        self._cache[key] = name
        return name
