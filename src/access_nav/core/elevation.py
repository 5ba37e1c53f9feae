"""Elevation profiles along a route path.

The synthetic profile is a display placeholder. The terrain profile samples
AWS Terrain Tiles (Terrarium format) at each path point and falls back to
the synthetic one if any tile cannot be read.
"""

import logging
import math
from io import BytesIO
from typing import Sequence

import httpx
import numpy as np
from PIL import Image

from ..models import ElevationSample, GeoPoint
from ..settings import settings

logger = logging.getLogger(__name__)

AWS_TERRAIN_URL = "https://s3.amazonaws.com/elevation-tiles-prod/terrarium/{z}/{x}/{y}.png"
TERRAIN_ZOOM = 15
TILE_SIZE = 256


def _profile_distances(n_points: int, total_distance_m: float) -> np.ndarray:
    return np.arange(n_points) / max(n_points, 1) * total_distance_m


def synthetic_profile(n_points: int, total_distance_m: float) -> list[ElevationSample]:
    """``base + amplitude * sin(i * frequency)`` over path index."""
    idx = np.arange(n_points)
    elevations = settings.base_elevation_m + settings.elevation_amplitude_m * np.sin(
        idx * settings.elevation_frequency
    )
    distances = _profile_distances(n_points, total_distance_m)
    return [
        ElevationSample(distance=float(d), elevation=float(e))
        for d, e in zip(distances, elevations)
    ]


def _lat_lon_to_pixel(lat: float, lon: float, zoom: int) -> tuple[int, int, int, int]:
    """Return (tile_x, tile_y, pixel_x, pixel_y) for a point at a zoom level."""
    lat_rad = math.radians(lat)
    n = 2.0 ** zoom
    x = (lon + 180.0) / 360.0 * n
    y = (1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0 * n
    tx, ty = int(x), int(y)
    px = min(int((x - tx) * TILE_SIZE), TILE_SIZE - 1)
    py = min(int((y - ty) * TILE_SIZE), TILE_SIZE - 1)
    return tx, ty, px, py


def _decode_terrarium(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Decode Terrarium format RGB to elevation in meters."""
    return (r * 256.0 + g + b / 256.0) - 32768.0


def _decode_tile(content: bytes) -> np.ndarray:
    img_array = np.array(Image.open(BytesIO(content)).convert("RGB"))
    r = img_array[:, :, 0].astype(np.float64)
    g = img_array[:, :, 1].astype(np.float64)
    b = img_array[:, :, 2].astype(np.float64)
    return _decode_terrarium(r, g, b)


async def terrain_profile(
    path: Sequence[GeoPoint], total_distance_m: float, zoom: int = TERRAIN_ZOOM,
) -> list[ElevationSample]:
    """Sample real terrain elevation at each point of ``path``."""
    pixels = [_lat_lon_to_pixel(p.lat, p.lon, zoom) for p in path]
    tiles: dict[tuple[int, int], np.ndarray] = {}

    async with httpx.AsyncClient(timeout=30.0, headers={"User-Agent": settings.user_agent}) as client:
        for tx, ty, _, _ in pixels:
            if (tx, ty) in tiles:
                continue
            url = AWS_TERRAIN_URL.format(z=zoom, x=tx, y=ty)
            try:
                response = await client.get(url)
                response.raise_for_status()
                tiles[(tx, ty)] = _decode_tile(response.content)
            except Exception as exc:
                logger.warning("Terrain tile %s failed, using synthetic profile: %s", url, exc)
                return synthetic_profile(len(path), total_distance_m)

    distances = _profile_distances(len(path), total_distance_m)
    return [
        ElevationSample(distance=float(d), elevation=float(tiles[(tx, ty)][py, px]))
        for d, (tx, ty, px, py) in zip(distances, pixels)
    ]
