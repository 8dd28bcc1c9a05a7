"""Exceptions raised while talking to the transit API or building timetables."""


class TubeStatusError(Exception):
    """Base class for every error the dashboard knows how to display."""


class TransitApiError(TubeStatusError):
    """A request failed after retries, or the response had an unexpected shape."""


class MalformedRouteError(TransitApiError):
    """A route sequence came back without both directions."""

    def __init__(self, line_id: str, route_count: int):
        self.line_id = line_id
        self.route_count = route_count
        super().__init__(
            f"Route sequence for '{line_id}' has {route_count} route(s), expected at least 2"
        )


class StationNotFound(TubeStatusError):
    """The stop search returned no match for the submitted station name."""

    def __init__(self, station_name: str):
        self.station_name = station_name
        super().__init__(f"No station matches '{station_name}'")
