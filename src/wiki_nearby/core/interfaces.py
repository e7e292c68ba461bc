"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from wiki_nearby.core.entities import Article, Bookmark, Coordinate


class CandidateSource(ABC):
    """Interface for fetching candidate articles around a coordinate."""

    @abstractmethod
    async def fetch(self, coordinate: Coordinate, radius_meters: int) -> list[Article]:
        """Fetch candidates within radius of the coordinate."""
        pass


class SummaryProvider(ABC):
    """Interface for enriching candidates with summary metadata."""

    @abstractmethod
    async def fetch_summary(self, article: Article) -> Article:
        """Return the article merged with its summary."""
        pass

    @abstractmethod
    async def fetch_summaries(
        self, articles: list[Article], max_concurrent: int = 8
    ) -> list[Article]:
        """Enrich many articles, dropping the ones that fail."""
        pass


class BookmarkStore(ABC):
    """Interface for persisting selected articles."""

    @abstractmethod
    def add(self, article: Article) -> Bookmark:
        pass

    @abstractmethod
    def remove(self, article_id: str) -> bool:
        pass

    @abstractmethod
    def get(self, article_id: str) -> Optional[Bookmark]:
        pass

    @abstractmethod
    def list(self) -> list[Bookmark]:
        pass

    def contains(self, article_id: str) -> bool:
        return self.get(article_id) is not None


class ReportGenerator(ABC):
    """Interface for rendering discovery results."""

    @abstractmethod
    async def generate(
        self, articles: list[Article], origin: Coordinate, radius_meters: int
    ) -> str:
        """Render articles found around the origin."""
        pass
