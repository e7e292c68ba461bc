"""Core domain layer."""

from wiki_nearby.core.bookmark_store import YamlBookmarkStore
from wiki_nearby.core.entities import Article, ArticleSource, ArticleSummary, Bookmark, Coordinate
from wiki_nearby.core.errors import DiscoveryError, DiscoveryFailed, NoLocation, SourceUnavailable
from wiki_nearby.core.interfaces import (
    BookmarkStore,
    CandidateSource,
    ReportGenerator,
    SummaryProvider,
)
from wiki_nearby.core.scoring import (
    DEFAULT_POLICY,
    CurationPolicy,
    curation_score,
    distance_meters,
    meets_curation_criteria,
    popularity_score,
)
from wiki_nearby.core.summary_cache import SummaryCache

__all__ = [
    "Article",
    "ArticleSource",
    "ArticleSummary",
    "Bookmark",
    "Coordinate",
    "DiscoveryError",
    "DiscoveryFailed",
    "NoLocation",
    "SourceUnavailable",
    "BookmarkStore",
    "CandidateSource",
    "ReportGenerator",
    "SummaryProvider",
    "YamlBookmarkStore",
    "CurationPolicy",
    "DEFAULT_POLICY",
    "curation_score",
    "distance_meters",
    "meets_curation_criteria",
    "popularity_score",
    "SummaryCache",
]
