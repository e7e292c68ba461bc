"""In-process cache of page summaries."""

import asyncio
from typing import Optional

from wiki_nearby.core.entities import ArticleSummary


class SummaryCache:
    """Title-keyed summary cache with a single owner.

    Entries are only ever added: the first stored summary for a title
    wins and nothing is evicted for the lifetime of the process.
    """

    def __init__(self) -> None:
        self._entries: dict[str, ArticleSummary] = {}
        self._lock = asyncio.Lock()

    async def get(self, title: str) -> Optional[ArticleSummary]:
        async with self._lock:
            return self._entries.get(title)

    async def put(self, title: str, summary: ArticleSummary) -> ArticleSummary:
        """Store a summary unless one is already cached; return the cached one."""
        async with self._lock:
            return self._entries.setdefault(title, summary)

    def __contains__(self, title: object) -> bool:
        return title in self._entries

    def __len__(self) -> int:
        return len(self._entries)
