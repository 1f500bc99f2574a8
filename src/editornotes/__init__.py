"""Dockable project notes panel with Documentation folder shortcuts."""

__version__ = "0.1.0"
