"""Zeitfresser - task core of a time tracking application."""

__version__ = "0.1.0"
