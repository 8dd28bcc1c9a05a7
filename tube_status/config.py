"""Configuration constants and dataclass for tube-status."""

from dataclasses import dataclass

# API constants
API_BASE = "https://api.tfl.gov.uk"
TRANSIT_MODE = "tube"
REQUEST_TIMEOUT = 10.0  # seconds
REFRESH_INTERVAL = 30  # seconds
MAX_RETRIES = 3
RETRY_DELAY = 2  # seconds

# statusSeverity reported by the API for "Good Service"
GOOD_SERVICE_SEVERITY = 10

TAB_TITLES = ("Line Status", "Timetable")


@dataclass
class Config:
    """Runtime configuration built from CLI arguments."""
    station: str | None = None
    once: bool = False
    status_view: bool = False
    refresh_interval: int = REFRESH_INTERVAL
    verbosity: int = 0
