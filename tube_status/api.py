"""HTTP client and retry logic for the TfL Unified API."""

import logging
from time import sleep
from typing import Any
from urllib.parse import quote

import httpx

from .config import API_BASE, MAX_RETRIES, REQUEST_TIMEOUT, RETRY_DELAY, TRANSIT_MODE
from .errors import TransitApiError
from .models import Arrival, Line, RouteSequence, StopPoint

logger = logging.getLogger(__name__)


def _is_retryable(error: httpx.HTTPError) -> bool:
    """Client errors won't fix themselves, except rate limiting."""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return status >= 500 or status == 429
    return True


def _describe(error: httpx.HTTPError) -> str:
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}"
    return str(error) or error.__class__.__name__


class TransitClient:
    """The four request shapes the dashboard needs from the transit API."""

    def __init__(self, base_url: str = API_BASE, mode: str = TRANSIT_MODE,
                 timeout: float = REQUEST_TIMEOUT, max_retries: int = MAX_RETRIES):
        self.base_url = base_url.rstrip("/")
        self.mode = mode
        self.timeout = timeout
        self.max_retries = max_retries

    def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET a path and decode the JSON body, retrying transient failures."""
        url = f"{self.base_url}{path}"
        for attempt in range(self.max_retries):
            try:
                logger.debug("GET %s params=%s (attempt %d)", url, params, attempt + 1)
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return response.json()

            except httpx.HTTPError as e:
                error_msg = _describe(e)
                if _is_retryable(e) and attempt < self.max_retries - 1:
                    logger.debug("%s for %s, retrying", error_msg, url)
                    sleep(RETRY_DELAY * (attempt + 1))
                    continue
                logger.warning("Request to %s failed: %s", url, error_msg)
                raise TransitApiError(f"{error_msg} fetching {path}") from e

            except ValueError as e:
                raise TransitApiError(f"Invalid JSON from {path}") from e

        raise TransitApiError(f"No attempts made for {path}")

    def _decode(self, path: str, decoder, payload):
        """Run a decoder, turning shape mismatches into TransitApiError."""
        try:
            return decoder(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TransitApiError(f"Unexpected response shape from {path}: {e!r}") from e

    def search_stop_points(self, query: str) -> list[StopPoint]:
        """Search stops by free text. Results keep the API's order."""
        path = f"/StopPoint/Search/{quote(query, safe='')}"
        data = self._get_json(path, params={"modes": self.mode, "includeHubs": "false"})
        return self._decode(path, lambda d: [StopPoint.from_api(m) for m in d["matches"]], data)

    def fetch_arrivals(self, stop_id: str) -> list[Arrival]:
        """Predicted arrivals at a stop, restricted to this client's mode."""
        path = f"/StopPoint/{quote(stop_id, safe='')}/Arrivals"
        data = self._get_json(path)

        def decode(items):
            return [
                Arrival.from_api(item) for item in items
                if item.get("modeName") in (None, self.mode)
            ]

        return self._decode(path, decode, data)

    def fetch_route_sequence(self, line_id: str) -> RouteSequence:
        """Ordered stops for every direction of a line."""
        path = f"/Line/{quote(line_id, safe='')}/Route/Sequence/all"
        data = self._get_json(path)
        return self._decode(path, RouteSequence.from_api, data)

    def fetch_line_status(self) -> list[Line]:
        """Current status of every line in this client's mode."""
        path = f"/Line/Mode/{self.mode}/Status"
        data = self._get_json(path)
        return self._decode(path, lambda d: [Line.from_api(item) for item in d], data)
