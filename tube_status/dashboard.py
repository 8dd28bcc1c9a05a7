#!/usr/bin/env python3
"""
tube-status — London Underground status and station timetable TUI

A terminal dashboard showing live line status and, for a named station,
upcoming arrivals grouped by line and platform with a map of each line.
Uses the TfL Unified API (https://api.tfl.gov.uk).

Usage:
    tube-status                         # Line status, then prompt for stations
    tube-status "Oxford Circus"         # Live timetable for one station
    tube-status "Oxford Circus" --once  # Print the timetable once and exit
    tube-status --status --once         # Print line status once and exit
"""

import argparse
import logging
import sys
from time import sleep

from rich.console import Console, Group
from rich.live import Live
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Prompt

from .api import TransitClient
from .cache import SnapshotCache
from .config import Config, REFRESH_INTERVAL, TAB_TITLES
from .display import (
    apply_main_title, build_error_panel, build_not_found_panel,
    build_status_grid, build_tabs, build_timetable_panel,
)
from .errors import StationNotFound, TubeStatusError
from .models import Line, TimetableSnapshot, _now, format_time
from .timetable import TimetableService

logger = logging.getLogger(__name__)

STATUS_TAB = 0
TIMETABLE_TAB = 1


class Session:
    """State for one run of the dashboard. Owns the snapshot cache."""

    def __init__(self, client: TransitClient | None = None, cache: SnapshotCache | None = None):
        self.client = client or TransitClient()
        self.timetables = TimetableService(self.client, cache)
        self.tab_index = STATUS_TAB
        self.lines: list[Line] = []
        self.lines_fetched_at = None
        self.station_name: str | None = None
        self.snapshot: TimetableSnapshot | None = None
        self.last_error: TubeStatusError | None = None

    @property
    def cache(self) -> SnapshotCache:
        return self.timetables.cache

    def next_tab(self) -> None:
        self.last_error = None
        self.tab_index = (self.tab_index + 1) % len(TAB_TITLES)

    def previous_tab(self) -> None:
        self.last_error = None
        if self.tab_index > 0:
            self.tab_index -= 1
        else:
            self.tab_index = len(TAB_TITLES) - 1

    def refresh_lines(self) -> bool:
        """Reload line status. Keeps the previous data if the fetch fails."""
        self.tab_index = STATUS_TAB
        try:
            self.lines = self.client.fetch_line_status()
        except TubeStatusError as e:
            self.last_error = e
            return False
        self.lines_fetched_at = _now()
        self.last_error = None
        return True

    def submit_station(self, station_name: str) -> bool:
        """Look up a station's timetable. Failures are kept for display."""
        self.tab_index = TIMETABLE_TAB
        self.station_name = station_name
        try:
            self.snapshot = self.timetables.get_or_build(station_name)
        except TubeStatusError as e:
            logger.info("Lookup for '%s' failed: %s", station_name, e)
            self.snapshot = None
            self.last_error = e
            return False
        self.last_error = None
        return True

    def render(self, refresh_interval: int | None = None) -> Group:
        """Build the current tab's view."""
        if self.last_error is not None:
            if isinstance(self.last_error, StationNotFound):
                body = build_not_found_panel(self.last_error.station_name)
            else:
                body = build_error_panel(str(self.last_error))
        elif self.tab_index == STATUS_TAB:
            body = build_status_grid(self.lines)
            apply_main_title(body, self.lines_fetched_at, refresh_interval)
        else:
            body = build_timetable_panel(self.snapshot)
            if self.snapshot:
                body.subtitle = f"[dim]Updated: {format_time(self.snapshot.refreshed_at)}[/]"

        return Group(build_tabs(self.tab_index), body)


def configure_logging(verbosity: int, console: Console | None = None) -> None:
    """WARNING by default; -v for INFO, -vv for DEBUG. Logs go to the given console."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def positive_int(value: str) -> int:
    """argparse type for intervals: a whole number of seconds, at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv: list[str] | None = None) -> Config:
    parser = argparse.ArgumentParser(
        description="London Underground line status and station timetables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s                          # Line status, then prompt for stations
    %(prog)s "Oxford Circus"          # Live timetable, refreshed every 30s
    %(prog)s "Oxford Circus" -r 10    # Refresh every 10 seconds
    %(prog)s "Oxford Circus" --once   # Print once and exit
    %(prog)s --status --once          # Print line status once and exit

In the interactive prompt, enter a station name to see its timetable,
'r' to refresh line status, '<' or '>' to switch tabs, or 'q' to quit.
        """
    )
    parser.add_argument(
        "station",
        nargs="?",
        help="Station name to show a timetable for (e.g., \"Oxford Circus\")"
    )
    parser.add_argument(
        "-r", "--refresh",
        type=positive_int,
        default=REFRESH_INTERVAL,
        help=f"Refresh interval in seconds (default: {REFRESH_INTERVAL})"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Display once and exit (no auto-refresh)"
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show line status instead of a station timetable"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log more detail (-v for info, -vv for debug)"
    )

    args = parser.parse_args(argv)
    return Config(
        station=args.station,
        once=args.once,
        status_view=args.status,
        refresh_interval=args.refresh,
        verbosity=args.verbose,
    )


def _update(session: Session, config: Config) -> bool:
    if config.status_view or not config.station:
        return session.refresh_lines()
    return session.submit_station(config.station)


def run_interactive(session: Session, console: Console) -> None:
    """Prompt for station names until the user quits."""
    session.refresh_lines()
    console.print(session.render())

    while True:
        answer = Prompt.ask(
            "[bold]Enter station[/] [dim](r = refresh status, </> = switch tab, q = quit)[/]",
            console=console,
            default="q",
        )
        if answer in ("q", ""):
            return
        if answer == "r":
            session.refresh_lines()
        elif answer == ">":
            session.next_tab()
        elif answer == "<":
            session.previous_tab()
        else:
            console.print(f"[dim]Fetching timetable for {escape(answer)}...[/]")
            session.submit_station(answer)
        console.clear()
        console.print(session.render())


def run_live(session: Session, console: Console, config: Config) -> None:
    """Re-fetch and redraw every refresh interval until interrupted."""
    _update(session, config)
    with Live(
        session.render(config.refresh_interval),
        console=console,
        refresh_per_second=1,
        screen=True
    ) as live:
        while True:
            sleep(config.refresh_interval)
            _update(session, config)
            live.update(session.render(config.refresh_interval))


def main(argv: list[str] | None = None) -> int:
    config = parse_args(argv)
    console = Console()
    configure_logging(config.verbosity, console)

    session = Session()

    if config.once:
        ok = _update(session, config)
        console.print(session.render())
        return 0 if ok else 1

    try:
        if config.station or config.status_view:
            run_live(session, console, config)
        else:
            run_interactive(session, console)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
