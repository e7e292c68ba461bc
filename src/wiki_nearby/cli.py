"""CLI entry point for wiki nearby."""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from wiki_nearby.adapters.report import MarkdownReportGenerator, format_distance
from wiki_nearby.adapters.sources import WikipediaGeoSearchSource, WikipediaNearCoordSource
from wiki_nearby.adapters.summaries import WikipediaSummaryClient
from wiki_nearby.config import Settings, get_settings
from wiki_nearby.core import Coordinate, DiscoveryError, YamlBookmarkStore
from wiki_nearby.use_cases import SORT_KEYS, DiscoveryService, ResultsService, miles_to_meters


def main(
    lat: Optional[float] = typer.Option(None, "--lat", help="Latitude of the search origin"),
    lon: Optional[float] = typer.Option(None, "--lon", help="Longitude of the search origin"),
    radius_miles: Optional[float] = typer.Option(None, "--radius-miles", help="Search radius in miles"),
    radius_meters: Optional[int] = typer.Option(None, "--radius-meters", help="Search radius in meters"),
    sort: str = typer.Option("curation", "--sort", help="Sort by 'curation' or 'popularity'"),
    output: Optional[Path] = typer.Option(None, "--output", help="Write a Markdown report"),
    bookmark: Optional[int] = typer.Option(None, "--bookmark", help="Bookmark the N-th result"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Path to config.yaml"),
) -> None:
    """Discover Wikipedia articles near a location."""
    if sort not in SORT_KEYS:
        raise typer.BadParameter("sort must be 'curation' or 'popularity'", param_hint="--sort")
    if (lat is None) != (lon is None):
        raise typer.BadParameter("--lat and --lon must be given together")

    settings = get_settings(config)
    exit_code = asyncio.run(
        async_run(settings, lat, lon, radius_miles, radius_meters, sort, output, bookmark)
    )
    if exit_code:
        raise typer.Exit(code=exit_code)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


def resolve_origin(
    settings: Settings, lat: Optional[float], lon: Optional[float]
) -> Coordinate:
    """Use the given coordinate or fall back to the configured default."""
    if lat is not None and lon is not None:
        try:
            return Coordinate(latitude=lat, longitude=lon)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--lat/--lon") from e
    return Coordinate(
        latitude=settings.location.default_latitude,
        longitude=settings.location.default_longitude,
    )


def resolve_radius(
    settings: Settings, radius_miles: Optional[float], radius_meters: Optional[int]
) -> int:
    if radius_meters is not None:
        return max(1, radius_meters)
    if radius_miles is not None:
        return miles_to_meters(radius_miles)
    return miles_to_meters(settings.location.default_radius_miles)


def build_discovery_service(settings: Settings) -> DiscoveryService:
    wikipedia = settings.wikipedia
    return DiscoveryService(
        geo_source=WikipediaGeoSearchSource(
            base_url=wikipedia.base_url,
            max_items=wikipedia.geosearch_limit,
            timeout=wikipedia.timeout,
            user_agent=wikipedia.user_agent,
        ),
        near_source=WikipediaNearCoordSource(
            base_url=wikipedia.base_url,
            max_items=wikipedia.nearcoord_limit,
            timeout=wikipedia.timeout,
            user_agent=wikipedia.user_agent,
        ),
        summary_provider=WikipediaSummaryClient(
            base_url=wikipedia.base_url,
            timeout=wikipedia.timeout,
            user_agent=wikipedia.user_agent,
        ),
        policy=settings.policy,
    )


async def async_run(
    settings: Settings,
    lat: Optional[float],
    lon: Optional[float],
    radius_miles: Optional[float],
    radius_meters: Optional[int],
    sort: str,
    output: Optional[Path],
    bookmark: Optional[int],
) -> int:
    """Async implementation of run command."""
    origin = resolve_origin(settings, lat, lon)
    radius = resolve_radius(settings, radius_miles, radius_meters)

    print("\n" + "=" * 70)
    print("🗺️  WIKI NEARBY - Статьи Википедии рядом")
    print("=" * 70)

    print(f"\n⚙️  Настройки:")
    if lat is None:
        print(f"  • Точка: {origin.latitude}, {origin.longitude} (по умолчанию)")
    else:
        print(f"  • Точка: {origin.latitude}, {origin.longitude}")
    print(f"  • Радиус: {radius} м ({format_distance(float(radius))})")
    print(f"  • Сортировка: {sort}")
    print(f"  • Источник: {settings.wikipedia.base_url}")

    discovery_service = build_discovery_service(settings)
    results_service = ResultsService(
        report_generator=MarkdownReportGenerator(),
        bookmark_store=YamlBookmarkStore(settings.bookmarks_file),
    )

    try:
        articles = await discovery_service.discover(origin, radius, sort_by=sort)
    except DiscoveryError as e:
        print("\n" + "=" * 70)
        print(f"❌ {e}")
        print("=" * 70)
        return 1

    if not articles:
        print("\n" + "=" * 70)
        print("❌ НЕ НАЙДЕНО ПОДХОДЯЩИХ СТАТЕЙ")
        print("=" * 70)
        return 0

    print("\n" + "=" * 70)
    print(f"📚 РЕЗУЛЬТАТЫ ({len(articles)})")
    print("=" * 70)
    for position, article in enumerate(articles, 1):
        thumbnail = "🖼️ " if article.has_thumbnail else "   "
        print(f"  {position:>2}. {thumbnail}{article.title[:60]} — {format_distance(article.distance_meters)}")
        if article.page_url:
            print(f"      └─ {article.page_url}")

    if output is not None:
        if output.is_dir():
            timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
            output = output / f"{timestamp}_nearby.md"
        report = await results_service.generate_report(articles, origin, radius)
        results_service.save_report(report, output)

    if bookmark is not None:
        if not 1 <= bookmark <= len(articles):
            print(f"⚠️  Нет результата с номером {bookmark}")
        else:
            selected = articles[bookmark - 1]
            results_service.bookmark(selected)
            print(f"🔖 Сохранено в закладки: {selected.title} ({settings.bookmarks_file})")

    print("\n" + "=" * 70)
    print(f"✅ ГОТОВО!")
    print("=" * 70)
    print()
    return 0


if __name__ == "__main__":
    app()
