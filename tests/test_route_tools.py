"""Tests for the route planning tools."""
import asyncio
import json
from unittest.mock import patch, AsyncMock

import pytest

from conftest import capture_tools
from access_nav.core.routing import synthesize_fallback_path
from access_nav.core.scoring import score_route
from access_nav.models import GeoPoint
from access_nav.state import state
from access_nav.tools.route import register_route_tools

START = GeoPoint(lat=27.6196, lon=85.5385)
END = GeoPoint(lat=27.6200, lon=85.5395)


@pytest.fixture
def tools():
    return capture_tools(register_route_tools)


def _route(source="provider"):
    return score_route([START, END], [], source=source)


def test_set_start_and_end(tools):
    assert "Start set" in tools["set_start"](lat=START.lat, lon=START.lon, label="Main Gate")
    assert "End set" in tools["set_end"](lat=END.lat, lon=END.lon)
    assert state.start.location == START
    assert state.start.label == "Main Gate"
    assert state.end.label == "27.62000, 85.53950"


@pytest.mark.parametrize("lat, lon", [(91, 0), (0, 181), (-90.5, 10)])
def test_invalid_coordinates_are_rejected(tools, lat, lon):
    result = tools["set_start"](lat=lat, lon=lon)
    assert result.startswith("Error: Invalid start coordinates")
    assert not state.start.is_set


def test_setting_a_point_clears_route(tools):
    state.route = _route()
    tools["set_end"](lat=END.lat, lon=END.lon)
    assert state.route is None


def test_swap_and_clear(tools):
    tools["set_start"](lat=START.lat, lon=START.lon)
    tools["set_end"](lat=END.lat, lon=END.lon)
    tools["swap_points"]()
    assert state.start.location == END
    assert state.end.location == START
    tools["clear_route"]()
    assert not state.start.is_set and not state.end.is_set


@pytest.mark.anyio
async def test_plan_route_requires_points(tools):
    result = await tools["plan_route"]()
    assert result.startswith("Error:")
    assert "set_start" in result


@pytest.mark.anyio
async def test_plan_route_with_routing_outage_uses_fallback(tools):
    tools["set_start"](lat=START.lat, lon=START.lon)
    tools["set_end"](lat=END.lat, lon=END.lon)
    with patch("access_nav.core.planner.fetch_walking_route", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = synthesize_fallback_path(START, END)
        result = await tools["plan_route"]()

    assert "approximate path" in result
    assert state.route.source == "fallback"
    assert len(state.route.segments) == 5
    assert len(state.route.elevation_profile) == 26
    assert state.route.warnings[-1] == "Verify accessibility features on ground"


@pytest.mark.anyio
async def test_plan_route_elevation_none(tools):
    tools["set_start"](lat=START.lat, lon=START.lon)
    tools["set_end"](lat=END.lat, lon=END.lon)
    with patch("access_nav.core.planner.fetch_walking_route", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = synthesize_fallback_path(START, END)
        await tools["plan_route"](elevation="none")
    assert state.route.elevation_profile is None


@pytest.mark.anyio
async def test_stale_route_is_discarded(tools):
    tools["set_start"](lat=START.lat, lon=START.lon)
    tools["set_end"](lat=END.lat, lon=END.lon)

    async def slow_plan(*args, **kwargs):
        # The user moves the destination while this request is in flight
        tools["set_end"](lat=27.6210, lon=85.5400)
        return _route()

    with patch("access_nav.tools.route.do_plan_route", side_effect=slow_plan):
        result = await tools["plan_route"]()

    assert result.startswith("Route discarded")
    assert state.route is None


@pytest.mark.anyio
async def test_overlapping_requests_keep_only_the_latest(tools):
    tools["set_start"](lat=START.lat, lon=START.lon)
    tools["set_end"](lat=END.lat, lon=END.lon)
    release_first = asyncio.Event()
    first_route, second_route = _route(), _route(source="fallback")
    calls = []

    async def fake_plan(*args, **kwargs):
        calls.append(len(calls))
        if len(calls) == 1:
            await release_first.wait()
            return first_route
        release_first.set()
        return second_route

    with patch("access_nav.tools.route.do_plan_route", side_effect=fake_plan):
        first, second = await asyncio.gather(tools["plan_route"](), tools["plan_route"]())

    assert first.startswith("Route discarded")
    assert second.startswith("Route planned")
    assert state.route is second_route


def test_get_route(tools):
    assert tools["get_route"]().startswith("Error:")
    state.route = _route()
    data = json.loads(tools["get_route"]())
    assert data["segments"] == 1
    assert "coordinates" not in data["segments_detail"][0]
    detailed = json.loads(tools["get_route"](include_coordinates=True))
    assert detailed["segments_detail"][0]["coordinates"][0] == [START.lat, START.lon]
