"""Error and not-found display panels."""

from rich.panel import Panel
from rich.text import Text


def build_error_panel(error: str) -> Panel:
    """Build an error display panel."""
    return Panel(
        Text(f"Error: {error}", style="bold red"),
        title="[bold red]Error[/]",
        border_style="red"
    )


def build_not_found_panel(station_name: str) -> Panel:
    """Build a not found display panel."""
    content = Text()
    content.append(f"No station found for '{station_name}'.\n\n", style="bold yellow")
    content.append("This could mean:\n", style="white")
    content.append("• The station name is misspelt\n", style="dim")
    content.append("• The station isn't served by the Underground\n", style="dim")
    content.append("\nTry the name as it appears on the map, e.g. 'Oxford Circus'.", style="white")

    return Panel(
        content,
        title="[bold yellow]Station Not Found[/]",
        border_style="yellow"
    )
