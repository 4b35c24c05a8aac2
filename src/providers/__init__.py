"""External LLM and search provider clients for the Pivot API."""
from .base_client import BaseHTTPProvider
from .text_generation import TextGenerationProvider, ClaudeProvider, OpenAIChatProvider
from .search_provider import SearchProvider
from .brave_search import BraveSearchProvider
from .newsapi_search import NewsAPISearchProvider
from .gnews_search import GNewsSearchProvider
from .tavily_search import TavilySearchProvider
from .perplexity_search import PerplexitySearchProvider
from .factory import build_text_provider, build_search_providers

__all__ = [
    "BaseHTTPProvider",
    "TextGenerationProvider",
    "ClaudeProvider",
    "OpenAIChatProvider",
    "SearchProvider",
    "BraveSearchProvider",
    "NewsAPISearchProvider",
    "GNewsSearchProvider",
    "TavilySearchProvider",
    "PerplexitySearchProvider",
    "build_text_provider",
    "build_search_providers",
]
