"""
Search provider capability.

A search provider turns a query string into ArticleCandidates. One provider's
failure must never abort the pipeline, so search() always returns a list:
missing credentials, non-2xx responses, timeouts and malformed bodies are
logged and reported as zero results.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from src.config import get_service_logger
from src.core.exceptions import (
    MalformedResponseError,
    ProviderError,
    ProviderTimeoutError,
)
from src.models import ArticleCandidate
from src.utils import URLUtils, utc_now_iso
from .base_client import BaseHTTPProvider

logger = get_service_logger(__name__)

DEFAULT_LINK_PREVIEW = "https://api.microlink.io/?url={url}&meta=false&embed=image.url"


class SearchProvider(BaseHTTPProvider, ABC):
    """Query in, candidate list out."""

    name: str = "search"
    supports_domain_exclusion: bool = False

    def __init__(
        self,
        api_key: str = "",
        score: float = 0.5,
        timeout: float = 8.0,
        client: Optional[httpx.AsyncClient] = None,
        description_max_chars: int = 200,
        link_preview_url: str = DEFAULT_LINK_PREVIEW,
    ):
        super().__init__(api_key=api_key, timeout=timeout, client=client)
        self.score = score
        self.description_max_chars = description_max_chars
        self.link_preview_url = link_preview_url

    @abstractmethod
    async def _fetch(
        self, query: str, exclude_domain: Optional[str]
    ) -> List[Dict[str, Any]]:
        """Call the provider and return its raw result items."""

    @abstractmethod
    def _to_candidate(self, item: Dict[str, Any]) -> Optional[ArticleCandidate]:
        """Map one raw result item, or None to drop it."""

    async def search(
        self, query: str, exclude_domain: Optional[str] = None
    ) -> List[ArticleCandidate]:
        """
        Search for articles, excluding the given domain.

        Args:
            query: Search query
            exclude_domain: www.-stripped host of the source article

        Returns:
            Candidates in provider order; empty on any failure
        """
        if not self.available:
            logger.info(f"{self.name} key not available, skipping")
            return []

        try:
            items = await self._fetch(query, exclude_domain)
        except ProviderTimeoutError as e:
            logger.warning(f"{self.name} search timed out", query=query, error=str(e))
            return []
        except ProviderError as e:
            logger.error(
                f"{self.name} search failed", query=query, status=e.status, error=str(e)
            )
            return []
        except MalformedResponseError as e:
            logger.error(f"{self.name} returned malformed results", query=query, raw=e.raw)
            return []

        candidates: List[ArticleCandidate] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            try:
                candidate = self._to_candidate(item)
            except PydanticValidationError as e:
                logger.warning(
                    f"{self.name} result skipped, invalid fields",
                    query=query,
                    url=item.get("url"),
                    error=str(e)[:200],
                )
                continue
            if candidate is None:
                continue
            if exclude_domain and candidate.source_domain == exclude_domain:
                continue
            candidates.append(candidate)

        logger.info(
            f"{self.name} search returned {len(candidates)} articles",
            query=query,
            raw_count=len(items),
        )
        return candidates

    def _build_candidate(
        self,
        url: Any,
        title: Any = None,
        description: Any = None,
        published_date: Any = None,
        image_url: Any = None,
        source_name: Any = None,
        author: Any = None,
        score: Optional[float] = None,
    ) -> Optional[ArticleCandidate]:
        """Normalize provider fields into an ArticleCandidate."""
        if not isinstance(url, str):
            return None
        domain = URLUtils.get_domain(url)
        if not domain:
            return None

        title, published_date, image_url, source_name, author = (
            _text(title),
            _text(published_date),
            _text(image_url),
            _text(source_name),
            _text(author),
        )
        description = description if isinstance(description, str) else ""
        if len(description) > self.description_max_chars:
            description = description[: self.description_max_chars] + "..."

        if not image_url:
            image_url = URLUtils.link_preview_image(url, self.link_preview_url)

        return ArticleCandidate(
            title=title or "No title",
            url=url,
            published_date=published_date or utc_now_iso(),
            author=author or None,
            image_url=image_url,
            description=description,
            source_domain=domain,
            source_name=source_name or URLUtils.derive_source_name(domain),
            relevance_score=self.score if score is None else score,
            provider=self.name,
        )


def _text(value: Any) -> Optional[str]:
    """Provider field as a non-empty string, or None for anything else."""
    if isinstance(value, str) and value.strip():
        return value
    return None
