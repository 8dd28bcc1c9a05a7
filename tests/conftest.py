"""Shared test fixtures and helpers for tube-status tests."""

import json
from contextlib import ExitStack
from datetime import datetime
from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest
from rich.console import Console

from tube_status.errors import TransitApiError
from tube_status.models import Arrival, Line, Route, RouteSequence, StopPoint


# =============================================================================
# Constants
# =============================================================================


# A fixed "now" for deterministic time-based tests
FIXED_NOW = datetime(2026, 10, 19, 8, 30, 0)

OXFORD_CIRCUS = StopPoint(id="940GZZLUOXC", name="Oxford Circus Underground Station", zone="1")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def freeze_time():
    """Patch every module's _now to return FIXED_NOW for deterministic tests."""
    with ExitStack() as stack:
        for target in ("tube_status.timetable._now", "tube_status.dashboard._now"):
            stack.enter_context(patch(target, return_value=FIXED_NOW))
        yield


@pytest.fixture
def fake_client():
    """A FakeTransitClient that knows Oxford Circus, with no arrivals yet."""
    client = FakeTransitClient()
    client.stops["Oxford Circus"] = [OXFORD_CIRCUS]
    return client


# =============================================================================
# Test data helpers
# =============================================================================


def make_arrival(
    line_id="victoria",
    platform_name="1",
    time_to_station=60,
    current_location="At Platform",
    expected_arrival="2026-10-19T08:31:00Z",
    towards="Brixton",
):
    """Build an Arrival record."""
    return Arrival(
        line_id=line_id,
        platform_name=platform_name,
        time_to_station=time_to_station,
        current_location=current_location,
        expected_arrival=expected_arrival,
        towards=towards,
    )


def make_route_sequence(line_id="victoria", forward=None, backward=None, routes=None):
    """Build a RouteSequence, by default two directions over the same stops."""
    if routes is None:
        forward = forward if forward is not None else ["A", "940GZZLUOXC", "C"]
        backward = backward if backward is not None else list(reversed(forward))
        routes = [Route(name="forward", stop_ids=forward), Route(name="backward", stop_ids=backward)]
    return RouteSequence(line_id=line_id, direction="all", ordered_routes=routes)


class FakeTransitClient:
    """
    In-memory stand-in for TransitClient.

    Records every call in `calls` and raises TransitApiError for any
    (method, argument) pair listed in `failures`.
    """

    def __init__(self):
        self.stops: dict[str, list[StopPoint]] = {}
        self.arrivals: dict[str, list[Arrival]] = {}
        self.routes: dict[str, RouteSequence] = {}
        self.lines: list[Line] = []
        self.failures: set[tuple[str, str]] = set()
        self.calls: list[tuple[str, str]] = []

    def _record(self, method, arg):
        self.calls.append((method, arg))
        if (method, arg) in self.failures:
            raise TransitApiError(f"{method}({arg}) failed")

    def search_stop_points(self, query):
        self._record("search", query)
        return list(self.stops.get(query, []))

    def fetch_arrivals(self, stop_id):
        self._record("arrivals", stop_id)
        if not stop_id:
            raise TransitApiError("HTTP 404 fetching /StopPoint//Arrivals")
        return list(self.arrivals.get(stop_id, []))

    def fetch_route_sequence(self, line_id):
        self._record("route", line_id)
        if line_id not in self.routes:
            return make_route_sequence(line_id)
        return self.routes[line_id]

    def fetch_line_status(self):
        self._record("status", "")
        return list(self.lines)

    def calls_to(self, method):
        return [arg for name, arg in self.calls if name == method]


def render_to_text(renderable, width=120) -> str:
    """Capture a Rich renderable as plain text for assertion."""
    console = Console(record=True, width=width, force_terminal=False)
    console.print(renderable)
    return console.export_text()


def load_fixture(name: str):
    """Load a JSON fixture file from tests/fixtures/."""
    fixture_path = Path(__file__).parent / "fixtures" / name
    with open(fixture_path) as f:
        return json.load(f)


def make_mock_httpx_client(json_response):
    """Create a mock httpx.Client that returns the given JSON from .get()."""
    mock_response = MagicMock()
    mock_response.json.return_value = json_response
    mock_response.raise_for_status.return_value = None
    mock_client = MagicMock()
    mock_client.__enter__ = MagicMock(return_value=mock_client)
    mock_client.__exit__ = MagicMock(return_value=False)
    mock_client.get.return_value = mock_response
    return mock_client


def httpx_status_error(status_code):
    """Create an httpx.HTTPStatusError side_effect for mocking."""
    import httpx

    response = httpx.Response(status_code, request=httpx.Request("GET", "http://test"))
    return httpx.HTTPStatusError(
        f"HTTP {status_code}", request=response.request, response=response
    )


def httpx_http_error():
    """Create a generic httpx.HTTPError for mocking."""
    import httpx

    return httpx.HTTPError("Connection failed")
