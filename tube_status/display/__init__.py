"""Display rendering components for tube-status."""

from .header import build_tabs, apply_main_title
from .status import build_status_grid, build_line_panel
from .timetable import build_timetable_panel
from .live_map import build_live_map
from .errors import build_error_panel, build_not_found_panel

__all__ = [
    "build_tabs",
    "apply_main_title",
    "build_status_grid",
    "build_line_panel",
    "build_timetable_panel",
    "build_live_map",
    "build_error_panel",
    "build_not_found_panel",
]
