"""
Perplexity search provider.

Perplexity answers through an OpenAI-style chat endpoint, so articles come
back as free text. The model is asked for a bare JSON array and the array is
pulled out of the reply; anything unparseable counts as zero results.
"""

from typing import Any, Dict, List, Optional

import httpx

from src.models import ArticleCandidate
from src.utils import extract_json_array
from .search_provider import SearchProvider
from .text_generation import OpenAIChatProvider

SEARCH_SYSTEM_PROMPT = (
    "You are a news search assistant. Reply with ONLY a JSON array of recent "
    "news articles. Each element must be an object with the keys "
    '"title", "url", "description" and "published_date". No prose, no markdown.'
)


class PerplexitySearchProvider(SearchProvider):
    name = "perplexity"
    api_url = "https://api.perplexity.ai/chat/completions"
    supports_domain_exclusion = True

    def __init__(
        self,
        api_key: str = "",
        model: str = "sonar",
        max_articles: int = 5,
        client: Optional[httpx.AsyncClient] = None,
        **kwargs,
    ):
        super().__init__(api_key=api_key, client=client, **kwargs)
        self.model = model
        self.max_articles = max_articles
        self.chat = OpenAIChatProvider(
            api_key=api_key,
            api_url=self.api_url,
            name="Perplexity",
            timeout=self.timeout,
            client=client,
        )

    async def _fetch(
        self, query: str, exclude_domain: Optional[str]
    ) -> List[Dict[str, Any]]:
        extra_body: Dict[str, Any] = {}
        if exclude_domain:
            extra_body["search_domain_filter"] = [f"-{exclude_domain}"]

        text = await self.chat.generate(
            f"Find up to {self.max_articles} news articles about: {query}",
            model=self.model,
            max_tokens=1000,
            temperature=0.2,
            system=SEARCH_SYSTEM_PROMPT,
            extra_body=extra_body,
        )
        return extract_json_array(text)

    def _to_candidate(self, item: Dict[str, Any]) -> Optional[ArticleCandidate]:
        return self._build_candidate(
            url=item.get("url"),
            title=item.get("title"),
            description=item.get("description"),
            published_date=item.get("published_date") or item.get("date"),
            image_url=item.get("image_url"),
        )
