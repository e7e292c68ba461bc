"""YAML-backed store for bookmarked articles."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import yaml

from wiki_nearby.core.entities import Article, Bookmark
from wiki_nearby.core.interfaces import BookmarkStore


class YamlBookmarkStore(BookmarkStore):
    """Keep bookmarks in a single YAML file keyed by article id."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._bookmarks: dict[str, Bookmark] = self._load()

    def add(self, article: Article) -> Bookmark:
        """Bookmark an article, replacing an existing entry with the same id."""
        bookmark = Bookmark.from_article(article)
        self._bookmarks[bookmark.id] = bookmark
        self._save()
        return bookmark

    def remove(self, article_id: str) -> bool:
        if self._bookmarks.pop(article_id, None) is None:
            return False
        self._save()
        return True

    def get(self, article_id: str) -> Optional[Bookmark]:
        return self._bookmarks.get(article_id)

    def list(self) -> list[Bookmark]:
        """Return bookmarks, newest first."""
        return sorted(self._bookmarks.values(), key=lambda b: b.created_at, reverse=True)

    def _load(self) -> dict[str, Bookmark]:
        if not self.path.exists():
            return {}

        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        bookmarks: dict[str, Bookmark] = {}
        for article_id, entry in data.items():
            created_at = entry.get("created_at")
            if isinstance(created_at, str):
                created_at = datetime.fromisoformat(created_at)

            bookmark = Bookmark(
                id=str(article_id),
                title=entry["title"],
                extract=entry.get("extract", ""),
                thumbnail_url=entry.get("thumbnail_url"),
                page_url=entry.get("page_url"),
                latitude=entry.get("latitude"),
                longitude=entry.get("longitude"),
            )
            if isinstance(created_at, datetime):
                bookmark.created_at = created_at
            bookmarks[bookmark.id] = bookmark

        return bookmarks

    def _save(self) -> None:
        """Write all bookmarks to the YAML file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            bookmark.id: {
                "title": bookmark.title,
                "extract": bookmark.extract,
                "thumbnail_url": bookmark.thumbnail_url,
                "page_url": bookmark.page_url,
                "latitude": bookmark.latitude,
                "longitude": bookmark.longitude,
                "created_at": bookmark.created_at.isoformat(),
            }
            for bookmark in self._bookmarks.values()
        }

        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
