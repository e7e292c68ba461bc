"""Markdown report generator."""

from typing import Optional

from wiki_nearby.core import Article, Coordinate, ReportGenerator

METERS_PER_MILE = 1609.34
FEET_PER_METER = 3.28084


def format_distance(meters: Optional[float]) -> str:
    """Format a distance as miles, or feet below a tenth of a mile."""
    if meters is None:
        return ""

    miles = meters / METERS_PER_MILE
    if miles >= 0.1:
        return f"{miles:.1f} mi"

    return f"{meters * FEET_PER_METER:.0f} ft"


class MarkdownReportGenerator(ReportGenerator):
    """Generate markdown report from curated articles."""

    def __init__(self, excerpt_length: int = 400) -> None:
        self.excerpt_length = excerpt_length

    async def generate(
        self, articles: list[Article], origin: Coordinate, radius_meters: int
    ) -> str:
        """Generate markdown report."""
        header = (
            f"# 🗺️ Статьи рядом с {origin.latitude:.4f}, {origin.longitude:.4f}"
        )
        radius = format_distance(float(radius_meters))

        if not articles:
            return f"{header}\n\nВ радиусе {radius} не найдено подходящих статей."

        lines = [
            header,
            "",
            f"Радиус: {radius} | Найдено статей: {len(articles)}",
            "",
        ]

        for position, article in enumerate(articles, 1):
            lines.extend(self._format_entry(position, article))

        return "\n".join(lines)

    def _format_entry(self, position: int, article: Article) -> list[str]:
        """Format single report entry."""
        title = f"[{article.title}]({article.page_url})" if article.page_url else article.title
        lines = [f"### {position}. {title}", ""]

        distance = format_distance(article.distance_meters)
        if distance:
            lines.extend([f"**Расстояние:** {distance}", ""])

        if article.thumbnail_url:
            lines.extend([f"![{article.title}]({article.thumbnail_url})", ""])

        if article.extract:
            excerpt = article.extract
            if len(excerpt) > self.excerpt_length:
                excerpt = excerpt[: self.excerpt_length].rstrip() + "…"
            lines.extend([excerpt, ""])

        lines.append("---")
        lines.append("")

        return lines
