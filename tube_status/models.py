"""Typed records decoded from the TfL API, plus small time helpers."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .config import GOOD_SERVICE_SEVERITY


def _now():
    """Current local time. Extracted for test patching."""
    return datetime.now()


def parse_time(time_val: str | None) -> datetime | None:
    """Parse an ISO 8601 time string from the API."""
    if not time_val or not isinstance(time_val, str):
        return None

    try:
        return datetime.fromisoformat(time_val.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None


def format_time(dt: datetime | None) -> str:
    """Format datetime for display."""
    if not dt:
        return "—"
    return dt.strftime("%H:%M:%S")


@dataclass
class StopPoint:
    """A resolved station. An empty id means the search found nothing."""
    id: str = ""
    name: str = ""
    zone: str = ""

    @property
    def resolved(self) -> bool:
        return bool(self.id)

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "StopPoint":
        # Search results may contain null entries
        if data is None:
            return cls()
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            zone=data.get("zone") or "",
        )


@dataclass
class Arrival:
    """One predicted train at a stop."""
    line_id: str
    platform_name: str
    time_to_station: int
    current_location: str = ""
    expected_arrival: str = ""
    towards: str = ""
    line_name: str = ""
    destination_name: str = ""
    station_name: str = ""
    vehicle_id: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Arrival":
        return cls(
            line_id=data["lineId"],
            platform_name=data["platformName"],
            time_to_station=int(data["timeToStation"]),
            current_location=data.get("currentLocation") or "",
            expected_arrival=data.get("expectedArrival") or "",
            towards=data.get("towards") or "",
            line_name=data.get("lineName") or "",
            destination_name=data.get("destinationName") or "",
            station_name=data.get("stationName") or "",
            vehicle_id=data.get("vehicleId") or "",
        )

    @property
    def expected_at(self) -> datetime | None:
        return parse_time(self.expected_arrival)


@dataclass
class Route:
    """Ordered stop identifiers for one direction of a line."""
    name: str
    stop_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Route":
        return cls(name=data.get("name") or "", stop_ids=list(data["naptanIds"]))


@dataclass
class RouteSequence:
    line_id: str
    direction: str
    ordered_routes: list[Route] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RouteSequence":
        return cls(
            line_id=data["lineId"],
            direction=data.get("direction") or "all",
            ordered_routes=[Route.from_api(r) for r in data.get("orderedLineRoutes") or []],
        )


@dataclass
class LiveMap:
    """Both directions of a line's stop ordering."""
    stops_forward: list[str] = field(default_factory=list)
    stops_backward: list[str] = field(default_factory=list)
    # Reserved for train positions; never populated
    trains_currently_at: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass
class StationNode:
    """A positioned stop on one direction of a line."""
    stop_id: str
    rect: Rect
    highlighted: bool = False


@dataclass
class TimetableSnapshot:
    """Everything the timetable view needs for one station query."""
    stop_point: StopPoint | None = None
    unique_lines: set[str] = field(default_factory=set)
    platforms_by_line: dict[str, list[str]] = field(default_factory=dict)
    arrivals: list[Arrival] = field(default_factory=list)
    live_maps: dict[str, LiveMap] = field(default_factory=dict)
    station_nodes: dict[str, tuple[list[StationNode], list[StationNode]]] = field(default_factory=dict)
    fetched_at: datetime | None = None
    refreshed_at: datetime | None = None

    def arrivals_for(self, line_id: str, platform_name: str) -> list[Arrival]:
        """Arrivals for one line and platform, soonest first."""
        return sorted(
            (a for a in self.arrivals
             if a.line_id == line_id and a.platform_name == platform_name),
            key=lambda a: (a.time_to_station, a.current_location),
        )


@dataclass
class LineStatus:
    status_severity: int
    status_severity_description: str = ""
    reason: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "LineStatus | None":
        if data is None:
            return None
        return cls(
            status_severity=int(data["statusSeverity"]),
            status_severity_description=data.get("statusSeverityDescription") or "",
            reason=data.get("reason"),
        )


@dataclass
class Disruption:
    category: str = ""
    category_description: str = ""
    description: str = ""
    summary: str = ""
    additional_info: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Disruption":
        return cls(
            category=data.get("category") or "",
            category_description=data.get("categoryDescription") or "",
            description=data.get("description") or "",
            summary=data.get("summary") or "",
            additional_info=data.get("additionalInfo") or "",
        )


@dataclass
class Line:
    """A metro line and its current service status."""
    id: str
    name: str
    mode_name: str = ""
    disruptions: list[Disruption] = field(default_factory=list)
    line_statuses: list[LineStatus | None] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Line":
        return cls(
            id=data["id"],
            name=data["name"],
            mode_name=data.get("modeName") or "",
            disruptions=[Disruption.from_api(d) for d in data.get("disruptions") or []],
            line_statuses=[LineStatus.from_api(s) for s in data.get("lineStatuses") or []],
        )

    @property
    def primary_status(self) -> LineStatus | None:
        return self.line_statuses[0] if self.line_statuses else None

    @property
    def is_good_service(self) -> bool:
        status = self.primary_status
        return status is None or status.status_severity == GOOD_SERVICE_SEVERITY

    @property
    def status_text(self) -> str:
        """Text for the status panel: the disruption reason when there is one."""
        status = self.primary_status
        if status is None:
            return "No LineStatus"
        if status.reason:
            return status.reason
        if status.status_severity == GOOD_SERVICE_SEVERITY:
            return "Good Service"
        return status.status_severity_description or "Unknown"
