"""
Brave Search news provider.
"""

from typing import Any, Dict, List, Optional

from src.models import ArticleCandidate
from .search_provider import SearchProvider


class BraveSearchProvider(SearchProvider):
    """Brave news search (past week). No native score, uses the configured weight."""

    name = "brave"
    api_url = "https://api.search.brave.com/res/v1/news/search"

    async def _fetch(
        self, query: str, exclude_domain: Optional[str]
    ) -> List[Dict[str, Any]]:
        data = await self._request_json(
            "GET",
            self.api_url,
            params={
                "q": query,
                "count": "10",
                "freshness": "pw",
                "text_decorations": "false",
            },
            headers={
                "X-Subscription-Token": self.api_key,
                "Accept": "application/json",
            },
        )
        results = data.get("results") if isinstance(data, dict) else None
        return results if isinstance(results, list) else []

    def _to_candidate(self, item: Dict[str, Any]) -> Optional[ArticleCandidate]:
        thumbnail = item.get("thumbnail") or {}
        return self._build_candidate(
            url=item.get("url"),
            title=item.get("title"),
            description=item.get("description"),
            published_date=item.get("page_age") or item.get("age"),
            image_url=thumbnail.get("src") if isinstance(thumbnail, dict) else None,
        )
