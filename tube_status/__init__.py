"""tube-status: London Underground line status and station timetables."""

__version__ = "0.1.0"
