"""
Multi-source searcher for the Pivot API.

Builds opposing-viewpoint queries from an extracted topic and runs each one
through a cascade of search providers in priority order, stopping early once
a query has enough results.
"""

import asyncio
from typing import List, Optional, Sequence

from src.config import Settings, get_service_logger, get_settings
from src.models import ArticleCandidate, SearchOutcome, TopicExtractionResult
from src.providers import SearchProvider

logger = get_service_logger(__name__)

CRITICISM_SUFFIX = "criticism debate controversy"
FALLBACK_SUFFIX = "alternative viewpoint different perspective"


def build_search_queries(
    topic: str, opposing_terms: Sequence[str], max_queries: int = 4
) -> List[str]:
    """
    Construct search queries, most specific first.

    The '<topic> alternative viewpoint different perspective' query is always
    present (last), so a search still happens without opposing terms.
    """
    queries: List[str] = []
    if opposing_terms:
        queries.append(f"{topic} {' '.join(opposing_terms[:2])}")
        queries.append(f"{topic} {CRITICISM_SUFFIX}")
        if len(opposing_terms) > 2:
            queries.append(f"{topic} {' '.join(opposing_terms[2:4])}")

    fallback = f"{topic} {FALLBACK_SUFFIX}"
    queries = queries[: max(max_queries - 1, 0)]
    queries.append(fallback)
    return queries


class MultiSourceSearcher:
    """
    Runs queries against a prioritized list of search providers.

    For each query: try the first provider; while the query has fewer than
    min_results results, try the next one and append its results.
    """

    def __init__(
        self,
        providers: List[SearchProvider],
        settings: Optional[Settings] = None,
    ):
        self.providers = providers
        self.settings = settings or get_settings()
        self.min_results = self.settings.min_results_per_query
        self.max_queries = self.settings.max_search_queries
        self.max_executed = self.settings.max_executed_queries
        self.query_delay = self.settings.query_delay
        self.concurrent = self.settings.search_concurrent_queries

    async def search_query(
        self, query: str, exclude_domain: Optional[str]
    ) -> List[ArticleCandidate]:
        """Run one query through the provider cascade."""
        results: List[ArticleCandidate] = []
        for provider in self.providers:
            provider_results = await provider.search(query, exclude_domain)
            results.extend(provider_results)
            if len(results) >= self.min_results:
                break
        return results

    async def search(
        self, topic: TopicExtractionResult, exclude_domain: Optional[str]
    ) -> SearchOutcome:
        """
        Search for opposing-viewpoint articles.

        Args:
            topic: Extracted topic and opposing terms
            exclude_domain: www.-stripped host of the source article

        Returns:
            SearchOutcome with all candidates in discovery order (not deduplicated)
        """
        queries = build_search_queries(
            topic.topic, topic.opposing_terms, self.max_queries
        )
        executed = queries[: self.max_executed]
        logger.info("Search queries built", queries=queries, executed=executed)

        candidates: List[ArticleCandidate] = []
        if self.concurrent:
            per_query = await asyncio.gather(
                *(self.search_query(query, exclude_domain) for query in executed)
            )
            for results in per_query:
                candidates.extend(results)
        else:
            for index, query in enumerate(executed):
                if index > 0 and self.query_delay > 0:
                    await asyncio.sleep(self.query_delay)
                candidates.extend(await self.search_query(query, exclude_domain))

        logger.info(
            f"Collected {len(candidates)} candidate articles",
            queries_executed=len(executed),
        )
        return SearchOutcome(
            queries=queries, executed_queries=executed, candidates=candidates
        )
