"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, start: bool = False, end: bool = False, route: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, start=True, end=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if start and not state.start.is_set:
        raise ValueError(
            "Set a start point first with set_start or select_search_result."
        )
    if end and not state.end.is_set:
        raise ValueError(
            "Set an end point first with set_end or select_search_result."
        )
    if route and state.route is None:
        raise ValueError(
            "Plan a route first with plan_route."
        )
