"""
NewsAPI 'everything' endpoint provider.
"""

from typing import Any, Dict, List, Optional

from src.models import ArticleCandidate
from .search_provider import SearchProvider


class NewsAPISearchProvider(SearchProvider):
    name = "newsapi"
    api_url = "https://newsapi.org/v2/everything"
    supports_domain_exclusion = True

    async def _fetch(
        self, query: str, exclude_domain: Optional[str]
    ) -> List[Dict[str, Any]]:
        params = {
            "q": query,
            "sortBy": "relevancy",
            "language": "en",
            "pageSize": "5",
            "apiKey": self.api_key,
        }
        if exclude_domain:
            params["excludeDomains"] = exclude_domain

        data = await self._request_json("GET", self.api_url, params=params)
        articles = data.get("articles") if isinstance(data, dict) else None
        return articles if isinstance(articles, list) else []

    def _to_candidate(self, item: Dict[str, Any]) -> Optional[ArticleCandidate]:
        source = item.get("source") or {}
        return self._build_candidate(
            url=item.get("url"),
            title=item.get("title"),
            description=item.get("description"),
            published_date=item.get("publishedAt"),
            image_url=item.get("urlToImage"),
            source_name=source.get("name") if isinstance(source, dict) else None,
            author=item.get("author"),
        )
