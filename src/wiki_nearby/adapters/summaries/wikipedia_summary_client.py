"""Wikipedia REST summary client for enriching candidates."""

import asyncio
from typing import Optional
from urllib.parse import quote

import httpx

from wiki_nearby.core import Article, ArticleSummary, SummaryCache, SummaryProvider


class WikipediaSummaryClient(SummaryProvider):
    """Fetch page summaries with an in-process cache keyed by title."""

    def __init__(
        self,
        base_url: str = "https://en.wikipedia.org",
        timeout: float = 30.0,
        user_agent: str | None = None,
        cache: Optional[SummaryCache] = None,
    ) -> None:
        self.summary_url = f"{base_url.rstrip('/')}/api/rest_v1/page/summary"
        self.timeout = timeout
        self.user_agent = user_agent
        self.cache = cache if cache is not None else SummaryCache()

    async def fetch_summary(
        self, article: Article, client: Optional[httpx.AsyncClient] = None
    ) -> Article:
        """Return the article merged with its summary.

        The cache is checked with the article's original title before any
        network I/O. Errors propagate to the caller.
        """
        cached = await self.cache.get(article.title)
        if cached is not None:
            return article.with_summary(cached)

        if client is None:
            async with self._create_client() as own_client:
                summary = await self._request_summary(own_client, article.title)
        else:
            summary = await self._request_summary(client, article.title)

        summary = await self.cache.put(article.title, summary)
        return article.with_summary(summary)

    async def fetch_summaries(
        self, articles: list[Article], max_concurrent: int = 8
    ) -> list[Article]:
        """Enrich articles with at most ``max_concurrent`` fetches in flight.

        Results are collected in completion order. Articles whose summary
        cannot be fetched are dropped.
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")

        if not articles:
            return []

        semaphore = asyncio.Semaphore(max_concurrent)
        results: list[Article] = []
        failures: list[tuple[str, Exception]] = []

        async with self._create_client() as client:
            async def worker(article: Article) -> None:
                async with semaphore:
                    try:
                        enriched = await self.fetch_summary(article, client)
                    except Exception as e:
                        failures.append((article.title, e))
                        return
                results.append(enriched)

            await asyncio.gather(*(worker(article) for article in articles))

        if failures:
            print(f"  └─ ⚠️  Без саммари: {len(failures)} из {len(articles)}")
            for title, error in failures[:5]:
                print(f"      • {title}: {error}")

        return results

    async def _request_summary(self, client: httpx.AsyncClient, title: str) -> ArticleSummary:
        """GET and decode a single summary."""
        url = f"{self.summary_url}/{quote(title.replace(' ', '_'), safe='')}"
        response = await client.get(url)
        response.raise_for_status()
        return ArticleSummary.from_payload(response.json())

    def _create_client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return httpx.AsyncClient(timeout=self.timeout, headers=headers, follow_redirects=True)
