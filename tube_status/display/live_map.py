"""Text canvas for a line's station nodes."""

from rich.text import Text

from ..models import StationNode

# Canvas bounds the node geometry is laid out against
X_BOUNDS = (10.0, 110.0)

TRACK = "─"
STOP = "○"
CURRENT_STOP = "◉"


def _column(x: float, width: int) -> int | None:
    low, high = X_BOUNDS
    if not low <= x < high:
        return None
    return int((x - low) / (high - low) * width)


def build_live_map(nodes: list[StationNode], width: int = 100) -> Text:
    """
    Draw nodes on a one-row canvas. Nodes outside the canvas bounds are
    clipped, the way a fixed-bounds canvas would clip them.
    """
    cells: list[tuple[str, str]] = [(" ", "")] * width
    placed = []
    for node in nodes:
        col = _column(node.rect.x, width)
        if col is not None:
            placed.append((col, node))
    if not placed:
        return Text("")

    first, last = placed[0][0], placed[-1][0]
    for col in range(first, last + 1):
        cells[col] = (TRACK, "dim")
    for col, node in placed:
        if node.highlighted:
            cells[col] = (CURRENT_STOP, "bold yellow")
        elif cells[col][0] != CURRENT_STOP:
            cells[col] = (STOP, "cyan")

    text = Text(no_wrap=True, overflow="crop")
    for char, style in cells[:last + 1]:
        text.append(char, style=style)
    return text
