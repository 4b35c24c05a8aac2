"""
Builds providers from settings.

Provider choice and priority are configuration: search_provider_order lists
provider names, and each provider gets its configured weight and credential.
"""

from typing import Callable, Dict, List, Optional

import httpx

from src.config import Settings, get_service_logger
from .brave_search import BraveSearchProvider
from .gnews_search import GNewsSearchProvider
from .newsapi_search import NewsAPISearchProvider
from .perplexity_search import PerplexitySearchProvider
from .search_provider import SearchProvider
from .tavily_search import TavilySearchProvider
from .text_generation import ClaudeProvider, TextGenerationProvider

logger = get_service_logger(__name__)


def _common(settings: Settings, client: Optional[httpx.AsyncClient]) -> Dict:
    return {
        "timeout": settings.provider_timeout,
        "client": client,
        "description_max_chars": settings.description_max_chars,
        "link_preview_url": settings.link_preview_url,
    }


SEARCH_PROVIDER_BUILDERS: Dict[
    str, Callable[[Settings, Optional[httpx.AsyncClient]], SearchProvider]
] = {
    "brave": lambda s, c: BraveSearchProvider(
        api_key=s.brave_api_key, score=s.brave_score, **_common(s, c)
    ),
    "newsapi": lambda s, c: NewsAPISearchProvider(
        api_key=s.newsapi_key, score=s.newsapi_score, **_common(s, c)
    ),
    "gnews": lambda s, c: GNewsSearchProvider(
        api_key=s.gnews_api_key, score=s.gnews_score, **_common(s, c)
    ),
    "tavily": lambda s, c: TavilySearchProvider(
        api_key=s.tavily_api_key, score=s.tavily_default_score, **_common(s, c)
    ),
    "perplexity": lambda s, c: PerplexitySearchProvider(
        api_key=s.perplexity_api_key,
        model=s.perplexity_model,
        score=s.perplexity_score,
        **_common(s, c),
    ),
}


def build_text_provider(
    settings: Settings, client: Optional[httpx.AsyncClient] = None
) -> TextGenerationProvider:
    """Claude client configured from settings."""
    return ClaudeProvider(
        api_key=settings.claude_api_key,
        api_url=settings.claude_api_url,
        api_version=settings.claude_api_version,
        timeout=settings.llm_timeout,
        client=client,
    )


def build_search_providers(
    settings: Settings, client: Optional[httpx.AsyncClient] = None
) -> List[SearchProvider]:
    """
    Search providers in configured priority order.

    Unknown names are logged and skipped.
    """
    providers: List[SearchProvider] = []
    for name in settings.search_providers:
        builder = SEARCH_PROVIDER_BUILDERS.get(name)
        if builder is None:
            logger.warning(f"Unknown search provider '{name}' in search_provider_order")
            continue
        providers.append(builder(settings, client))

    if not any(provider.available for provider in providers):
        logger.warning("No search provider has a configured API key")
    return providers
