"""Route group exports."""

from . import health, inbox, planner, routes

__all__ = ["health", "inbox", "planner", "routes"]
