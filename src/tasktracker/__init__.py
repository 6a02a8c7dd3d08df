"""Command-line task tracker backed by a local JSON file."""

from tasktracker.config import VERSION as __version__

__all__ = ["__version__"]
