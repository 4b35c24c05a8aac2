"""
Tavily search provider.

Tavily scores every result itself, so its native score is used for ranking
and the configured weight only fills in when a result has none.
"""

from typing import Any, Dict, List, Optional

from src.models import ArticleCandidate
from .search_provider import SearchProvider


class TavilySearchProvider(SearchProvider):
    name = "tavily"
    api_url = "https://api.tavily.com/search"
    supports_domain_exclusion = True

    def __init__(self, *args, max_results: int = 5, topic: str = "news", **kwargs):
        super().__init__(*args, **kwargs)
        self.max_results = max_results
        self.topic = topic

    async def _fetch(
        self, query: str, exclude_domain: Optional[str]
    ) -> List[Dict[str, Any]]:
        payload: Dict[str, Any] = {
            "query": query,
            "topic": self.topic,
            "search_depth": "basic",
            "max_results": self.max_results,
            "include_answer": False,
        }
        if exclude_domain:
            payload["exclude_domains"] = [exclude_domain]

        data = await self._request_json(
            "POST",
            self.api_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
        )
        results = data.get("results") if isinstance(data, dict) else None
        return results if isinstance(results, list) else []

    def _to_candidate(self, item: Dict[str, Any]) -> Optional[ArticleCandidate]:
        score = item.get("score")
        return self._build_candidate(
            url=item.get("url"),
            title=item.get("title"),
            description=item.get("content") or item.get("description"),
            published_date=item.get("published_date"),
            image_url=item.get("image"),
            score=float(score) if isinstance(score, (int, float)) else None,
        )
