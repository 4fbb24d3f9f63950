"""Daily habit tracking with archived history."""

__version__ = "0.1.0"
