"""Tests for the Markdown report generator."""

import pytest

from wiki_nearby.adapters.report import MarkdownReportGenerator, format_distance
from wiki_nearby.core import Article, ArticleSource, Coordinate

ORIGIN = Coordinate(40.7580, -73.9855)


def test_format_distance_miles():
    assert format_distance(1609.34) == "1.0 mi"
    assert format_distance(805) == "0.5 mi"


def test_format_distance_feet():
    """Distances under a tenth of a mile are shown in feet."""
    assert format_distance(100) == "328 ft"
    assert format_distance(0) == "0 ft"


def test_format_distance_missing():
    assert format_distance(None) == ""


@pytest.mark.asyncio
async def test_generate_report():
    generator = MarkdownReportGenerator(excerpt_length=20)
    article = Article(
        id="1",
        title="Times Square",
        source=ArticleSource.GEOSEARCH,
        distance_meters=50.0,
        extract="Times Square is a major commercial intersection.",
        thumbnail_url="https://upload.wikimedia.org/ts.jpg",
        page_url="https://en.wikipedia.org/wiki/Times_Square",
    )

    report = await generator.generate([article], ORIGIN, 805)

    assert report.startswith("# 🗺️")
    assert "40.7580, -73.9855" in report
    assert "0.5 mi" in report
    assert "### 1. [Times Square](https://en.wikipedia.org/wiki/Times_Square)" in report
    assert "164 ft" in report
    assert "![Times Square](https://upload.wikimedia.org/ts.jpg)" in report
    assert "Times Square is a ma…" in report


@pytest.mark.asyncio
async def test_generate_empty_report():
    report = await MarkdownReportGenerator().generate([], ORIGIN, 100)

    assert "не найдено" in report
    assert "328 ft" in report
