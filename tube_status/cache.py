"""Process-lifetime cache of assembled timetable snapshots."""

from .models import TimetableSnapshot


class SnapshotCache:
    """
    Snapshots keyed by the station name exactly as the user typed it.

    Entries are never evicted or replaced; callers mutate a cached
    snapshot's arrivals in place instead.
    """

    def __init__(self):
        self._snapshots: dict[str, TimetableSnapshot] = {}

    def lookup(self, station_name: str) -> TimetableSnapshot | None:
        return self._snapshots.get(station_name)

    def insert(self, station_name: str, snapshot: TimetableSnapshot) -> TimetableSnapshot:
        """Store a snapshot. Returns the entry already cached under the name, if any."""
        return self._snapshots.setdefault(station_name, snapshot)

    def __contains__(self, station_name: str) -> bool:
        return station_name in self._snapshots

    def __len__(self) -> int:
        return len(self._snapshots)
