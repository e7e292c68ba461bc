"""Summary adapters for enriching candidates."""

from wiki_nearby.adapters.summaries.wikipedia_summary_client import WikipediaSummaryClient

__all__ = ["WikipediaSummaryClient"]
