"""Timetable view: arrivals by line and platform, plus live maps."""

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import TimetableSnapshot
from .live_map import build_live_map


def format_arrival(time_to_station: int, current_location: str) -> str:
    return f"{time_to_station} ---- {current_location}"


def build_platform_table(snapshot: TimetableSnapshot, line_id: str, platform: str) -> Panel:
    """Arrivals for one platform of one line, soonest first."""
    table = Table(show_header=False, box=None, expand=True, padding=0)
    table.add_column(overflow="fold")

    arrivals = snapshot.arrivals_for(line_id, platform)
    for arrival in arrivals:
        table.add_row(format_arrival(arrival.time_to_station, arrival.current_location))
    if not arrivals:
        table.add_row(Text("No trains", style="dim"))

    return Panel(table, title=escape(platform), border_style="bright_yellow")


def build_line_timetable(snapshot: TimetableSnapshot, line_id: str, map_width: int = 60) -> Panel:
    """Platforms on the left, forward and backward live maps on the right."""
    platforms = Table.grid(expand=True, padding=(0, 1))
    platform_names = snapshot.platforms_by_line.get(line_id, [])
    for _ in platform_names:
        platforms.add_column(ratio=1)
    if platform_names:
        platforms.add_row(*(build_platform_table(snapshot, line_id, p) for p in platform_names))

    forward, backward = snapshot.station_nodes.get(line_id, ([], []))
    maps = Group(
        build_live_map(forward, width=map_width),
        Text(""),
        build_live_map(backward, width=map_width),
    )

    body = Table.grid(expand=True, padding=(0, 2))
    body.add_column(ratio=1)
    body.add_column(ratio=2)
    body.add_row(platforms, maps)

    return Panel(body, title=f"[bold]{escape(line_id)}[/]", border_style="bright_red")


def build_timetable_panel(snapshot: TimetableSnapshot | None) -> Panel:
    """Build the timetable for a station, or an empty frame if there's nothing to show."""
    station = ""
    if snapshot and snapshot.stop_point:
        station = f" for {escape(snapshot.stop_point.name)}"
    title = f"Timetable{station}"

    if snapshot is None or not snapshot.arrivals:
        return Panel(Text(""), title=title)

    lines = [build_line_timetable(snapshot, line_id) for line_id in sorted(snapshot.unique_lines)]
    return Panel(Group(*lines), title=title)
