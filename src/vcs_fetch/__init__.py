"""Version-control checkout and refresh for dependency fetchers."""

__version__ = "0.1.0"
