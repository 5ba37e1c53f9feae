import logging
from io import BytesIO

import numpy as np
import pytest
from PIL import Image
from unittest.mock import patch, AsyncMock, MagicMock

from conftest import mock_async_client
from access_nav.models import GeoPoint

PATH = [GeoPoint(lat=27.6196 + i * 0.0001, lon=85.5385) for i in range(5)]


def _tile_png(rgb=(128, 100, 0)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", (256, 256), rgb).save(buf, format="PNG")
    return buf.getvalue()


def test_elevation_module_has_logger():
    import access_nav.core.elevation as elev_mod
    assert hasattr(elev_mod, 'logger'), "elevation module should have a module-level logger"


def test_synthetic_profile_formula():
    from access_nav.core.elevation import synthetic_profile

    profile = synthetic_profile(10, 500.0)
    assert len(profile) == 10
    assert profile[0].distance == 0.0
    assert profile[0].elevation == pytest.approx(780.0)
    assert profile[3].elevation == pytest.approx(780 + 15 * np.sin(0.9))
    assert profile[5].distance == pytest.approx(250.0)
    assert all(765 <= s.elevation <= 795 for s in profile)


def test_synthetic_profile_empty():
    from access_nav.core.elevation import synthetic_profile

    assert synthetic_profile(0, 100.0) == []


def test_decode_terrarium():
    from access_nav.core.elevation import _decode_terrarium

    r, g, b = np.array([128.0]), np.array([100.0]), np.array([0.0])
    assert _decode_terrarium(r, g, b)[0] == pytest.approx(100.0)


def test_pixel_lookup_stays_in_tile():
    from access_nav.core.elevation import _lat_lon_to_pixel

    tx, ty, px, py = _lat_lon_to_pixel(27.6196, 85.5385, 15)
    assert 0 <= px < 256 and 0 <= py < 256
    assert tx == int((85.5385 + 180) / 360 * 2 ** 15)


@pytest.mark.anyio
async def test_terrain_profile_samples_tiles():
    from access_nav.core.elevation import terrain_profile

    resp = MagicMock()
    resp.raise_for_status = MagicMock()
    resp.content = _tile_png()
    with patch("httpx.AsyncClient") as mock_client_cls:
        client = mock_async_client(mock_client_cls, get=AsyncMock(return_value=resp))
        profile = await terrain_profile(PATH, 44.0)

    assert [s.elevation for s in profile] == pytest.approx([100.0] * 5)
    assert profile[-1].distance == pytest.approx(44.0 * 4 / 5)
    # Neighbouring points share a tile, fetched once
    assert client.get.await_count == len({c.args[0] for c in client.get.call_args_list})


@pytest.mark.anyio
async def test_failed_tile_logs_warning_and_uses_synthetic(caplog):
    """A failed tile fetch should log a warning and fall back to the placeholder."""
    from access_nav.core.elevation import terrain_profile, synthetic_profile

    with caplog.at_level(logging.WARNING, logger="access_nav.core.elevation"):
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_async_client(mock_client_cls, get=AsyncMock(side_effect=Exception("tile fetch failed")))
            profile = await terrain_profile(PATH, 44.0)

    assert profile == synthetic_profile(len(PATH), 44.0)
    assert any(
        r.name == "access_nav.core.elevation" and r.levelno == logging.WARNING
        for r in caplog.records
    )


@pytest.mark.anyio
async def test_undecodable_tile_uses_synthetic():
    from access_nav.core.elevation import terrain_profile, synthetic_profile

    resp = MagicMock()
    resp.raise_for_status = MagicMock()
    resp.content = b"not a png"
    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_async_client(mock_client_cls, get=AsyncMock(return_value=resp))
        profile = await terrain_profile(PATH, 44.0)

    assert profile == synthetic_profile(len(PATH), 44.0)
