"""Tab bar and the main title/subtitle shared by every view."""

from datetime import datetime

from rich.panel import Panel
from rich.text import Text

from ..config import TAB_TITLES


def build_tabs(selected: int, titles: tuple[str, ...] = TAB_TITLES) -> Panel:
    """Build the tab bar, first letter of each tab in yellow."""
    tabs = Text()
    for i, title in enumerate(titles):
        if i:
            tabs.append(" │ ", style="dim")
        highlight = " on grey23 bold" if i == selected else ""
        tabs.append(title[:1], style=f"yellow{highlight}")
        tabs.append(title[1:], style=f"bright_yellow{highlight}")

    return Panel(tabs, title="Tabs", border_style="white")


def apply_main_title(panel: Panel, last_fetch_time: datetime | None = None,
                     refresh_interval: int | None = None) -> None:
    """Add the main 'Tube Status' title and status subtitle to a panel."""
    panel.title = "[bold cyan]Tube Status[/]"
    status_parts = []
    if last_fetch_time:
        status_parts.append(f"Updated: {last_fetch_time.strftime('%H:%M:%S')}")
    else:
        status_parts.append("Updated: —")
    if refresh_interval:
        status_parts.append(f"Refresh: {refresh_interval}s")
    status_parts.append("Press Ctrl+C to quit")
    panel.subtitle = f"[dim]{' | '.join(status_parts)}[/]"
