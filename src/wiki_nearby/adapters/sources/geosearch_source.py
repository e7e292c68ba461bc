"""Wikipedia geosearch source for geotagged articles."""

from typing import Any

import httpx

from wiki_nearby.core import Article, ArticleSource, CandidateSource, Coordinate, SourceUnavailable


class WikipediaGeoSearchSource(CandidateSource):
    """Fetch geotagged pages within a radius, with coordinates and distance."""

    emoji = "📍"
    name = "Wikipedia GeoSearch"

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
        """Fetch geotagged pages near the coordinate.

        Raises:
            SourceUnavailable: On transport errors, HTTP errors or a
                response that cannot be decoded.
        """
        params = {
            "format": "json",
            "action": "query",
            "list": "geosearch",
            "gscoord": f"{coordinate.latitude}|{coordinate.longitude}",
            "gsradius": str(radius_meters),
            "gslimit": str(self.max_items),
            "gsprop": "type|name|country|region|globe|dim|dist",
        }

        async with httpx.AsyncClient(timeout=self.timeout, headers=self._get_headers()) as client:
            try:
                response = await client.get(self.api_url, params=params)
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                raise SourceUnavailable(self.name, str(e)) from e

        try:
            return [self._create_article(row) for row in data["query"]["geosearch"]]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise SourceUnavailable(self.name, f"malformed response: {e!r}") from e

    def _create_article(self, row: dict[str, Any]) -> Article:
        """Create article from a geosearch row."""
        dist = row.get("dist")
        return Article(
            id=str(row["pageid"]),
            title=row["title"],
            source=ArticleSource.GEOSEARCH,
            distance_meters=float(dist) if dist is not None else None,
            coordinate=Coordinate(latitude=float(row["lat"]), longitude=float(row["lon"])),
        )

    def _get_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers
