"""Distance and ranking functions used by curation."""

from dataclasses import dataclass
from math import asin, cos, radians, sin, sqrt

from wiki_nearby.core.entities import Article, Coordinate

EARTH_RADIUS_METERS = 6371000.0
DISAMBIGUATION_MARKER = "(disambiguation)"


@dataclass(frozen=True)
class CurationPolicy:
    """Tunable curation constants."""

    min_extract_length: int = 280
    extract_cap: int = 1200
    extract_weight: float = 0.1
    thumbnail_boost: float = 200.0
    missing_distance: float = 999999.0
    max_results: int = 30
    max_concurrent_enrichment: int = 8
    exclude_flagged_disambiguation: bool = False


DEFAULT_POLICY = CurationPolicy()


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (haversine) distance between two coordinates in meters."""
    lat1, lon1, lat2, lon2 = map(radians, [a.latitude, a.longitude, b.latitude, b.longitude])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h marginally above 1 for antipodal points
    return 2 * asin(sqrt(min(1.0, h))) * EARTH_RADIUS_METERS


def curation_score(article: Article, policy: CurationPolicy = DEFAULT_POLICY) -> float:
    """Composite ranking score, lower is better."""
    base_distance = (
        article.distance_meters
        if article.distance_meters is not None
        else policy.missing_distance
    )
    thumbnail_boost = policy.thumbnail_boost if article.has_thumbnail else 0.0
    extract_boost = min(article.extract_length, policy.extract_cap) * policy.extract_weight

    return base_distance - thumbnail_boost - extract_boost


def popularity_score(article: Article, policy: CurationPolicy = DEFAULT_POLICY) -> int:
    """Popularity, higher is better.

    Falls back to extract length plus a thumbnail bonus when pageviews
    are unavailable.
    """
    if article.pageviews is not None:
        return article.pageviews

    thumbnail_bonus = int(policy.thumbnail_boost) if article.has_thumbnail else 0
    return article.extract_length + thumbnail_bonus


def meets_curation_criteria(article: Article, policy: CurationPolicy = DEFAULT_POLICY) -> bool:
    """Check that the article is worth reading."""
    if article.extract is None:
        return False

    if len(article.extract) < policy.min_extract_length:
        return False

    if DISAMBIGUATION_MARKER in article.title:
        return False

    if policy.exclude_flagged_disambiguation and article.is_disambiguation:
        return False

    return True
