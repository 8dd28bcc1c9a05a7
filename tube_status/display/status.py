"""Line status dashboard grid."""

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import Line

GRID_COLUMNS = 3


def build_line_panel(line: Line) -> Panel:
    """One line's status: green border for good service, red otherwise."""
    style = "bright_green" if line.is_good_service else "bright_red"
    return Panel(
        Text(line.status_text, overflow="fold"),
        title=f"[bold]{escape(line.name)}[/]",
        border_style=style,
    )


def build_status_grid(lines: list[Line]) -> Panel:
    """Build the dashboard of line status panels, three to a row."""
    if not lines:
        return Panel(Text("No line status available", style="dim"), title="Dashboard")

    grid = Table.grid(expand=True, padding=(0, 1))
    for _ in range(GRID_COLUMNS):
        grid.add_column(ratio=1)

    panels = [build_line_panel(line) for line in lines]
    for start in range(0, len(panels), GRID_COLUMNS):
        row = panels[start:start + GRID_COLUMNS]
        row += [""] * (GRID_COLUMNS - len(row))
        grid.add_row(*row)

    disrupted = sum(1 for line in lines if not line.is_good_service)
    subtitle = "[green]Good service on all lines[/]" if not disrupted else f"[red]{disrupted} line(s) disrupted[/]"
    return Panel(grid, title="[bold]Dashboard[/]", subtitle=subtitle, border_style="white")
