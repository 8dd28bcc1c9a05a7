"""Fixed-geometry station nodes for the live map canvas."""

from .models import Rect, StationNode

NODE_START_X = 12.5
NODE_STEP_X = 3.5
NODE_Y = 50.0
NODE_WIDTH = 2.0
NODE_HEIGHT = 10.0


def project(stop_ids: list[str], current_stop_id: str) -> list[StationNode]:
    """
    Lay out one node per stop, left to right, in sequence order.
    Nodes whose stop is the current station are highlighted.
    """
    return [
        StationNode(
            stop_id=stop_id,
            rect=Rect(
                x=NODE_START_X + i * NODE_STEP_X,
                y=NODE_Y,
                width=NODE_WIDTH,
                height=NODE_HEIGHT,
            ),
            highlighted=stop_id == current_stop_id,
        )
        for i, stop_id in enumerate(stop_ids)
    ]
