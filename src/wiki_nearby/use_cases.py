"""Business logic use cases."""

import asyncio
from pathlib import Path
from typing import Literal, Optional

from wiki_nearby.core import (
    DEFAULT_POLICY,
    Article,
    BookmarkStore,
    CandidateSource,
    Coordinate,
    CurationPolicy,
    DiscoveryFailed,
    NoLocation,
    ReportGenerator,
    SummaryProvider,
    curation_score,
    distance_meters,
    meets_curation_criteria,
    popularity_score,
)

SortKey = Literal["curation", "popularity"]
SORT_KEYS: tuple[str, ...] = ("curation", "popularity")

METERS_PER_MILE = 1609.34
MIN_RADIUS_METERS = 10


def miles_to_meters(miles: float) -> int:
    """Convert a user-facing radius in miles to whole meters, at least 10."""
    return max(MIN_RADIUS_METERS, int(miles * METERS_PER_MILE))


def merge_candidates(geo_articles: list[Article], near_articles: list[Article]) -> list[Article]:
    """Deduplicate by id; geosearch results win over nearcoord ones."""
    articles_by_id: dict[str, Article] = {}

    for article in geo_articles:
        articles_by_id.setdefault(article.id, article)

    for article in near_articles:
        articles_by_id.setdefault(article.id, article)

    return list(articles_by_id.values())


def backfill_distances(articles: list[Article], origin: Coordinate) -> list[Article]:
    """Compute missing distances from coordinates; present values are kept."""
    backfilled = []
    for article in articles:
        if article.distance_meters is None and article.coordinate is not None:
            article = article.with_distance(distance_meters(origin, article.coordinate))
        backfilled.append(article)
    return backfilled


def filter_within_radius(articles: list[Article], radius_meters: int) -> list[Article]:
    """Keep articles with a known distance no greater than the radius."""
    return [
        a for a in articles
        if a.distance_meters is not None and a.distance_meters <= radius_meters
    ]


def curate(articles: list[Article], policy: CurationPolicy = DEFAULT_POLICY) -> list[Article]:
    """Filter by quality, sort by curation score and keep the top results."""
    filtered = [a for a in articles if meets_curation_criteria(a, policy)]
    ranked = sorted(filtered, key=lambda a: curation_score(a, policy))
    return ranked[:policy.max_results]


def sort_by_popularity(
    articles: list[Article], policy: CurationPolicy = DEFAULT_POLICY
) -> list[Article]:
    return sorted(articles, key=lambda a: popularity_score(a, policy), reverse=True)


class DiscoveryService:
    """Service for discovering and curating articles around a coordinate."""

    def __init__(
        self,
        geo_source: CandidateSource,
        near_source: CandidateSource,
        summary_provider: SummaryProvider,
        policy: CurationPolicy = DEFAULT_POLICY,
    ) -> None:
        self.geo_source = geo_source
        self.near_source = near_source
        self.summary_provider = summary_provider
        self.policy = policy

    async def discover(
        self,
        coordinate: Optional[Coordinate],
        radius_meters: int,
        sort_by: SortKey = "curation",
    ) -> list[Article]:
        """Discover curated articles within radius of the coordinate.

        Returns:
            At most ``policy.max_results`` articles; an empty list means
            nothing qualified.

        Raises:
            NoLocation: If no coordinate is given.
            DiscoveryFailed: If the geosearch source fails.
            ValueError: If the radius is below 1 meter or the sort key
                is unknown.
        """
        if coordinate is None:
            raise NoLocation()
        if radius_meters < 1:
            raise ValueError(f"Radius must be at least 1 meter, got {radius_meters}")
        if sort_by not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {sort_by!r}")

        print("\n" + "=" * 70)
        print("📥 ЭТАП 1: СБОР КАНДИДАТОВ ИЗ ИСТОЧНИКОВ")
        print("=" * 70)

        geo_result, near_result = await asyncio.gather(
            self.geo_source.fetch(coordinate, radius_meters),
            self.near_source.fetch(coordinate, radius_meters),
            return_exceptions=True,
        )

        if isinstance(geo_result, BaseException):
            print(f"  └─ ❌ {self._source_name(self.geo_source)}: {geo_result}")
            if not isinstance(geo_result, Exception):
                raise geo_result
            raise DiscoveryFailed(geo_result) from geo_result

        if isinstance(near_result, BaseException):
            print(f"  └─ ⚠️  {self._source_name(self.near_source)}: {near_result}")
            if not isinstance(near_result, Exception):
                raise near_result
            near_result = []

        print(f"  {self._source_emoji(self.geo_source)} {self._source_name(self.geo_source)}: {len(geo_result)}")
        print(f"  {self._source_emoji(self.near_source)} {self._source_name(self.near_source)}: {len(near_result)}")

        candidates = merge_candidates(geo_result, near_result)
        print(f"\n✓ Уникальных кандидатов: {len(candidates)}")

        print("\n" + "=" * 70)
        print("📝 ЭТАП 2: ЗАГРУЗКА САММАРИ")
        print("=" * 70)
        print(f"Загрузка {len(candidates)} саммари (до {self.policy.max_concurrent_enrichment} одновременно)...")

        enriched = await self.summary_provider.fetch_summaries(
            candidates, max_concurrent=self.policy.max_concurrent_enrichment
        )
        print(f"✓ Получено саммари: {len(enriched)} из {len(candidates)}")

        print("\n" + "=" * 70)
        print("📊 ЭТАП 3: ФИЛЬТРАЦИЯ И РАНЖИРОВАНИЕ")
        print("=" * 70)

        within_radius = filter_within_radius(backfill_distances(enriched, coordinate), radius_meters)
        print(f"✓ В радиусе {radius_meters} м: {len(within_radius)}")

        curated = curate(within_radius, self.policy)
        print(f"✓ Прошло курирование: {len(curated)}")

        if sort_by == "popularity":
            curated = sort_by_popularity(curated, self.policy)

        return curated

    @staticmethod
    def _source_name(source: CandidateSource) -> str:
        return getattr(source, "name", source.__class__.__name__)

    @staticmethod
    def _source_emoji(source: CandidateSource) -> str:
        return getattr(source, "emoji", "🔍")


class ResultsService:
    """Service for reporting and bookmarking discovered articles."""

    def __init__(
        self,
        report_generator: ReportGenerator,
        bookmark_store: Optional[BookmarkStore] = None,
    ) -> None:
        self.report_generator = report_generator
        self.bookmark_store = bookmark_store

    async def generate_report(
        self, articles: list[Article], origin: Coordinate, radius_meters: int
    ) -> str:
        return await self.report_generator.generate(articles, origin, radius_meters)

    def save_report(self, report: str, output_path: Path) -> None:
        """Save report to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report, encoding="utf-8")
        print(f"Report saved to {output_path}")

    def bookmark(self, article: Article) -> bool:
        """Bookmark an article if a store is configured."""
        if not self.bookmark_store:
            return False

        self.bookmark_store.add(article)
        return True
