"""Source adapters for fetching candidate articles."""

from wiki_nearby.adapters.sources.geosearch_source import WikipediaGeoSearchSource
from wiki_nearby.adapters.sources.nearcoord_source import WikipediaNearCoordSource

__all__ = ["WikipediaGeoSearchSource", "WikipediaNearCoordSource"]
