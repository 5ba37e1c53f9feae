import pytest


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_session(tmp_path, monkeypatch):
    """Point the report store at a temp file and reset the global session."""
    from access_nav.state import state, report_store, RoutePoint

    monkeypatch.setattr(report_store, "path", tmp_path / "reports.json")
    state.start = RoutePoint()
    state.end = RoutePoint()
    state.route = None
    state.osm_hazards = []
    state.pending_search_results = {}
    yield


def capture_tools(register) -> dict:
    """Register a tool group against a mock MCP and return the tool functions."""
    from unittest.mock import MagicMock

    tools = {}
    mock_mcp = MagicMock()

    def capture(**kwargs):
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn
        return decorator
    mock_mcp.tool = capture
    register(mock_mcp)
    return tools


def mock_async_client(mock_client_cls, **methods):
    """Configure a patched httpx.AsyncClient class to yield a client with ``methods``."""
    from unittest.mock import AsyncMock

    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    for name, impl in methods.items():
        setattr(mock_client, name, impl)
    mock_client_cls.return_value = mock_client
    return mock_client
