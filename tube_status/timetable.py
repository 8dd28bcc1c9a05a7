"""Station resolution, arrival grouping and the snapshot lookup policy."""

import logging
from typing import Protocol

from .cache import SnapshotCache
from .errors import MalformedRouteError, StationNotFound
from .models import (
    Arrival, LiveMap, RouteSequence, StationNode, StopPoint, TimetableSnapshot, _now,
)
from .projector import project

logger = logging.getLogger(__name__)


class TransitSource(Protocol):
    def search_stop_points(self, query: str) -> list[StopPoint]: ...

    def fetch_arrivals(self, stop_id: str) -> list[Arrival]: ...

    def fetch_route_sequence(self, line_id: str) -> RouteSequence: ...


def resolve_station(client: TransitSource, station_name: str) -> StopPoint:
    """
    Resolve free text to a stop.

    Zero matches give an empty StopPoint; with several matches the first one
    the API returned wins.
    """
    matches = client.search_stop_points(station_name)
    if not matches:
        logger.info("No stop matches '%s'", station_name)
        return StopPoint()

    if len(matches) > 1:
        logger.debug("%d stops match '%s', using the first", len(matches), station_name)
    stop_point = matches[0]
    logger.info("Resolved '%s' to %s (%s)", station_name, stop_point.id, stop_point.name)
    return stop_point


def find_unique_lines(arrivals: list[Arrival]) -> set[str]:
    return {a.line_id for a in arrivals}


def group_platforms(arrivals: list[Arrival]) -> dict[str, list[str]]:
    """Sorted, de-duplicated platform names for every line with an arrival."""
    seen: dict[str, dict[str, None]] = {}
    for arrival in arrivals:
        seen.setdefault(arrival.line_id, {})[arrival.platform_name] = None
    return {line: sorted(platforms) for line, platforms in seen.items()}


def build_live_map(route_sequence: RouteSequence) -> LiveMap:
    """Take the first two routes of a sequence as forward and backward."""
    routes = route_sequence.ordered_routes
    if len(routes) < 2:
        raise MalformedRouteError(route_sequence.line_id, len(routes))
    return LiveMap(
        stops_forward=list(routes[0].stop_ids),
        stops_backward=list(routes[1].stop_ids),
    )


def project_live_map(live_map: LiveMap, current_stop_id: str) -> tuple[list[StationNode], list[StationNode]]:
    return (
        project(live_map.stops_forward, current_stop_id),
        project(live_map.stops_backward, current_stop_id),
    )


def build_snapshot(client: TransitSource, station_name: str) -> TimetableSnapshot:
    """
    Run the full aggregation for a station that isn't cached yet.

    Raises StationNotFound when the search has no match, and lets any
    TransitApiError from the client propagate. Route sequences are fetched
    one line at a time.
    """
    stop_point = resolve_station(client, station_name)
    if not stop_point.resolved:
        raise StationNotFound(station_name)

    arrivals = client.fetch_arrivals(stop_point.id)
    unique_lines = find_unique_lines(arrivals)
    platforms_by_line = group_platforms(arrivals)

    live_maps: dict[str, LiveMap] = {}
    station_nodes: dict[str, tuple[list[StationNode], list[StationNode]]] = {}
    for line_id in sorted(unique_lines):
        route_sequence = client.fetch_route_sequence(line_id)
        live_map = build_live_map(route_sequence)
        live_maps[line_id] = live_map
        station_nodes[line_id] = project_live_map(live_map, stop_point.id)

    now = _now()
    return TimetableSnapshot(
        stop_point=stop_point,
        unique_lines=unique_lines,
        platforms_by_line=platforms_by_line,
        arrivals=arrivals,
        live_maps=live_maps,
        station_nodes=station_nodes,
        fetched_at=now,
        refreshed_at=now,
    )


class TimetableService:
    """Serves snapshots from the cache, building them on first request."""

    def __init__(self, client: TransitSource, cache: SnapshotCache | None = None):
        self.client = client
        self.cache = cache if cache is not None else SnapshotCache()

    def get_or_build(self, station_name: str) -> TimetableSnapshot:
        """
        Return the snapshot for a station name.

        A cached snapshot only gets fresh arrivals; its platforms, live maps
        and station nodes stay as they were when first built, even if the new
        arrivals mention other lines or platforms. If the refresh fails the
        cached snapshot is left as it was.
        """
        snapshot = self.cache.lookup(station_name)
        if snapshot is not None:
            logger.info("Cache hit for '%s', refreshing arrivals", station_name)
            stop_id = snapshot.stop_point.id if snapshot.stop_point else ""
            arrivals = self.client.fetch_arrivals(stop_id)
            snapshot.arrivals = arrivals
            snapshot.refreshed_at = _now()
            return snapshot

        logger.info("Cache miss for '%s', building timetable", station_name)
        snapshot = build_snapshot(self.client, station_name)
        return self.cache.insert(station_name, snapshot)
