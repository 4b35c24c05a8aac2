"""
GNews search provider.
"""

from typing import Any, Dict, List, Optional

from src.models import ArticleCandidate
from .search_provider import SearchProvider


class GNewsSearchProvider(SearchProvider):
    name = "gnews"
    api_url = "https://gnews.io/api/v4/search"

    async def _fetch(
        self, query: str, exclude_domain: Optional[str]
    ) -> List[Dict[str, Any]]:
        data = await self._request_json(
            "GET",
            self.api_url,
            params={
                "q": query,
                "lang": "en",
                "country": "us",
                "max": "5",
                "apikey": self.api_key,
            },
        )
        articles = data.get("articles") if isinstance(data, dict) else None
        return articles if isinstance(articles, list) else []

    def _to_candidate(self, item: Dict[str, Any]) -> Optional[ArticleCandidate]:
        source = item.get("source") or {}
        return self._build_candidate(
            url=item.get("url"),
            title=item.get("title"),
            description=item.get("description"),
            published_date=item.get("publishedAt"),
            image_url=item.get("image"),
            source_name=source.get("name") if isinstance(source, dict) else None,
        )
