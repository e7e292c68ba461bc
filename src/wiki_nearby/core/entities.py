"""Core domain entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class ArticleSource(str, Enum):
    """Source that discovered an article."""

    GEOSEARCH = "geosearch"
    NEARCOORD = "nearcoord"


@dataclass(frozen=True)
class Coordinate:
    """Geographic coordinate in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class ArticleSummary:
    """Descriptive metadata from the page summary endpoint."""

    title: str
    extract: Optional[str] = None
    thumbnail_url: Optional[str] = None
    page_url: Optional[str] = None
    page_type: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_disambiguation(self) -> bool:
        if self.page_type == "disambiguation":
            return True
        return bool(self.description) and "disambiguation" in self.description.lower()

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ArticleSummary":
        """Decode a REST summary payload.

        Raises:
            ValueError: If the payload has no usable title or a text
                field holds something other than a string.
        """
        title = payload.get("title") if isinstance(payload, dict) else None
        if not isinstance(title, str) or not title:
            raise ValueError("Summary payload has no title")

        thumbnail = payload.get("thumbnail") or {}
        content_urls = payload.get("content_urls") or {}
        desktop = (content_urls.get("desktop") or {}) if isinstance(content_urls, dict) else None
        if not isinstance(thumbnail, dict) or not isinstance(desktop, dict):
            raise ValueError(f"Summary payload for {title!r} has malformed links")

        return cls(
            title=title,
            extract=_optional_str(payload, "extract"),
            thumbnail_url=_optional_str(thumbnail, "source"),
            page_url=_optional_str(desktop, "page"),
            page_type=_optional_str(payload, "type"),
            description=_optional_str(payload, "description"),
        )


def _optional_str(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Summary field {key!r} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Article:
    """Article discovered near a location.

    Instances are never mutated; each pipeline step builds a new record
    through one of the ``with_*`` constructors.
    """

    id: str
    title: str
    source: ArticleSource
    distance_meters: Optional[float] = None
    extract: Optional[str] = None
    thumbnail_url: Optional[str] = None
    page_url: Optional[str] = None
    coordinate: Optional[Coordinate] = None
    pageviews: Optional[int] = None
    is_disambiguation: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ID cannot be empty")
        if not self.title:
            raise ValueError("Title cannot be empty")

    @property
    def has_thumbnail(self) -> bool:
        return self.thumbnail_url is not None

    @property
    def extract_length(self) -> int:
        return len(self.extract) if self.extract else 0

    def with_summary(self, summary: ArticleSummary) -> "Article":
        """Merge summary fields; the summary title replaces ours."""
        return replace(
            self,
            title=summary.title,
            extract=summary.extract,
            thumbnail_url=summary.thumbnail_url,
            page_url=summary.page_url,
            is_disambiguation=summary.is_disambiguation,
        )

    def with_distance(self, distance_meters: float) -> "Article":
        return replace(self, distance_meters=distance_meters)


@dataclass
class Bookmark:
    """Saved article, persisted outside the discovery pipeline."""

    id: str
    title: str
    extract: str
    thumbnail_url: Optional[str] = None
    page_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_article(cls, article: Article) -> "Bookmark":
        coordinate = article.coordinate
        return cls(
            id=article.id,
            title=article.title,
            extract=article.extract or "",
            thumbnail_url=article.thumbnail_url,
            page_url=article.page_url,
            latitude=coordinate.latitude if coordinate else None,
            longitude=coordinate.longitude if coordinate else None,
        )

    def to_article(self) -> Article:
        coordinate = None
        if self.latitude is not None and self.longitude is not None:
            coordinate = Coordinate(self.latitude, self.longitude)

        # Whitespace-only extracts are treated as missing
        extract = self.extract if self.extract.strip() else None

        return Article(
            id=self.id,
            title=self.title,
            source=ArticleSource.GEOSEARCH,
            extract=extract,
            thumbnail_url=self.thumbnail_url,
            page_url=self.page_url,
            coordinate=coordinate,
        )
