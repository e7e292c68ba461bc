"""Discover and curate Wikipedia articles near a location."""

__version__ = "0.1.0"
