"""Wikipedia full-text search source using the nearcoord keyword."""

import httpx

from wiki_nearby.core import Article, ArticleSource, CandidateSource, Coordinate


class WikipediaNearCoordSource(CandidateSource):
    """Search pages near a coordinate by keyword.

    Results carry only id and title. The nearcoord keyword is not available
    on every wiki, so any failure yields an empty list instead of an error.
    """

    emoji = "🔎"
    name = "Wikipedia NearCoord"

    def __init__(
        self,
        base_url: str = "https://en.wikipedia.org",
        max_items: int = 50,
        timeout: float = 30.0,
        user_agent: str | None = None,
    ) -> None:
        self.api_url = f"{base_url.rstrip('/')}/w/api.php"
        self.max_items = max_items
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch(self, coordinate: Coordinate, radius_meters: int) -> list[Article]:
        """Fetch title matches near the coordinate, or nothing."""
        params = {
            "format": "json",
            "action": "query",
            "list": "search",
            "srnamespace": "0",
            "srlimit": str(self.max_items),
            "srsearch": f"nearcoord:{radius_meters}m,{coordinate.latitude},{coordinate.longitude}",
        }

        headers = {"Accept": "application/json"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        async with httpx.AsyncClient(timeout=self.timeout, headers=headers) as client:
            try:
                response = await client.get(self.api_url, params=params)
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                print(f"  └─ ⚠️  {self.name} недоступен: {e}")
                return []

        try:
            results = (data.get("query") or {}).get("search")
            if not results:
                return []

            return [
                Article(
                    id=str(result["pageid"]),
                    title=result["title"],
                    source=ArticleSource.NEARCOORD,
                )
                for result in results
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            print(f"  └─ ⚠️  {self.name}: неожиданный ответ ({e!r})")
            return []
