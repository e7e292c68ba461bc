"""Tests for the Wikipedia summary client."""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from wiki_nearby.adapters.summaries import WikipediaSummaryClient
from wiki_nearby.core import Article, ArticleSource, ArticleSummary, SummaryCache


def make_article(page_id: int, title: str) -> Article:
    return Article(id=str(page_id), title=title, source=ArticleSource.GEOSEARCH, distance_meters=10.0)


def summary_payload(title: str) -> dict:
    return {
        "title": title.replace("_", " "),
        "extract": f"{title} is a place. " * 20,
        "thumbnail": {"source": f"https://upload.wikimedia.org/{title}.jpg"},
        "content_urls": {"desktop": {"page": f"https://en.wikipedia.org/wiki/{title}"}},
    }


def make_response(payload: dict) -> Mock:
    response = Mock()
    response.raise_for_status = Mock()
    response.json = Mock(return_value=payload)
    return response


def failing_response(message: str) -> Mock:
    response = Mock()
    response.raise_for_status = Mock(side_effect=httpx.HTTPError(message))
    return response


@pytest.mark.asyncio
async def test_fetch_summary_merges_and_caches() -> None:
    """Test a cache miss fetches, stores under the original title and merges."""
    client = WikipediaSummaryClient(base_url="https://en.wikipedia.org")

    with patch("httpx.AsyncClient") as mock_client:
        mock_get = AsyncMock(return_value=make_response(summary_payload("Bryant_Park")))
        mock_client.return_value.__aenter__.return_value.get = mock_get

        enriched = await client.fetch_summary(make_article(1, "Bryant_Park"))

    assert enriched.title == "Bryant Park"
    assert enriched.thumbnail_url == "https://upload.wikimedia.org/Bryant_Park.jpg"
    assert enriched.page_url == "https://en.wikipedia.org/wiki/Bryant_Park"
    assert enriched.distance_meters == 10.0
    assert "Bryant_Park" in client.cache
    assert mock_get.call_args.args[0] == (
        "https://en.wikipedia.org/api/rest_v1/page/summary/Bryant_Park"
    )


@pytest.mark.asyncio
async def test_fetch_summary_cache_hit_makes_no_request() -> None:
    """Test a cached title is served without network I/O."""
    cache = SummaryCache()
    await cache.put("Times Square", ArticleSummary(title="Times Square", extract="Cached extract"))
    client = WikipediaSummaryClient(cache=cache)

    with patch("httpx.AsyncClient") as mock_client:
        mock_get = AsyncMock()
        mock_client.return_value.__aenter__.return_value.get = mock_get

        enriched = await client.fetch_summary(make_article(1, "Times Square"))
        batch = await client.fetch_summaries([make_article(1, "Times Square")])

    assert enriched.extract == "Cached extract"
    assert batch[0].extract == "Cached extract"
    mock_get.assert_not_called()


@pytest.mark.asyncio
async def test_fetch_summary_quotes_title() -> None:
    client = WikipediaSummaryClient()
    shared_client = Mock()
    shared_client.get = AsyncMock(return_value=make_response(summary_payload("AC/DC")))

    await client.fetch_summary(make_article(1, "AC/DC"), shared_client)

    url = shared_client.get.call_args.args[0]
    assert url.endswith("/page/summary/AC%2FDC")


@pytest.mark.asyncio
async def test_fetch_summary_error_propagates() -> None:
    client = WikipediaSummaryClient()
    shared_client = Mock()
    shared_client.get = AsyncMock(return_value=failing_response("404 Not Found"))

    with pytest.raises(httpx.HTTPError):
        await client.fetch_summary(make_article(1, "Deleted Page"), shared_client)

    assert len(client.cache) == 0


@pytest.mark.asyncio
async def test_fetch_summaries_drops_failures() -> None:
    """Test failed titles are dropped without affecting the rest."""
    client = WikipediaSummaryClient()
    articles = [make_article(i, f"Place_{i}") for i in range(6)]

    async def fake_get(url: str) -> Mock:
        if url.endswith(("Place_1", "Place_4")):
            return failing_response("404 Not Found")
        if url.endswith("Place_2"):
            return make_response({"unexpected": True})
        title = url.rsplit("/", 1)[-1]
        return make_response(summary_payload(title))

    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(side_effect=fake_get)
        enriched = await client.fetch_summaries(articles, max_concurrent=3)

    assert sorted(a.id for a in enriched) == ["0", "3", "5"]
    assert len(client.cache) == 3


@pytest.mark.asyncio
async def test_fetch_summaries_drops_wrongly_typed_extract() -> None:
    """Test a summary whose extract is not text is dropped like any failed decode."""
    client = WikipediaSummaryClient()
    articles = [make_article(1, "Good"), make_article(2, "Bad")]

    async def fake_get(url: str) -> Mock:
        title = url.rsplit("/", 1)[-1]
        if title == "Bad":
            return make_response({"title": "Bad", "extract": 12345})
        return make_response(summary_payload(title))

    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(side_effect=fake_get)
        enriched = await client.fetch_summaries(articles, max_concurrent=2)

    assert [a.id for a in enriched] == ["1"]
    assert "Bad" not in client.cache


@pytest.mark.asyncio
async def test_fetch_summaries_bounds_concurrency() -> None:
    """Test no more than max_concurrent fetches are in flight."""
    client = WikipediaSummaryClient()
    articles = [make_article(i, f"Place_{i}") for i in range(20)]
    in_flight = 0
    peak = 0

    async def fake_get(url: str) -> Mock:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return make_response(summary_payload(url.rsplit("/", 1)[-1]))

    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(side_effect=fake_get)
        enriched = await client.fetch_summaries(articles, max_concurrent=4)

    assert len(enriched) == 20
    assert peak == 4


@pytest.mark.asyncio
async def test_fetch_summaries_collects_in_completion_order() -> None:
    client = WikipediaSummaryClient()
    articles = [make_article(1, "Slow"), make_article(2, "Fast")]

    async def fake_get(url: str) -> Mock:
        title = url.rsplit("/", 1)[-1]
        await asyncio.sleep(0.05 if title == "Slow" else 0)
        return make_response(summary_payload(title))

    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(side_effect=fake_get)
        enriched = await client.fetch_summaries(articles, max_concurrent=2)

    assert [a.title for a in enriched] == ["Fast", "Slow"]


@pytest.mark.asyncio
async def test_fetch_summaries_empty_and_invalid_limit() -> None:
    client = WikipediaSummaryClient()

    assert await client.fetch_summaries([]) == []

    with pytest.raises(ValueError):
        await client.fetch_summaries([make_article(1, "X")], max_concurrent=0)


@pytest.mark.asyncio
async def test_summary_cache_first_write_wins() -> None:
    cache = SummaryCache()
    first = ArticleSummary(title="A", extract="first")
    second = ArticleSummary(title="A", extract="second")

    assert await cache.put("A", first) is first
    assert await cache.put("A", second) is first
    assert (await cache.get("A")).extract == "first"
    assert await cache.get("missing") is None
