"""
Pivot pipeline for the Pivot API.

Orchestrates the opposing-viewpoint search: validate -> extract topic ->
search providers -> rank. Only topic extraction can fail the request;
search providers degrade to zero results.
"""

import time
from typing import Optional

import httpx

from src.config import Settings, get_service_logger, get_settings
from src.config.logging_config import log_pipeline_step
from src.core.exceptions import ValidationError
from src.models import PivotResult
from src.processing import MultiSourceSearcher, ResultRanker, TopicExtractor
from src.providers import build_search_providers, build_text_provider
from src.utils import URLUtils

logger = get_service_logger(__name__)

NO_RESULTS_MESSAGE = "No opposing viewpoint articles found for this topic."


class PivotPipeline:
    """
    Finds articles presenting an opposing viewpoint to a source article.

    Stages: topic extractor -> multi-source searcher -> result ranker.
    """

    def __init__(
        self,
        topic_extractor: TopicExtractor,
        searcher: MultiSourceSearcher,
        ranker: ResultRanker,
    ):
        self.topic_extractor = topic_extractor
        self.searcher = searcher
        self.ranker = ranker

    @staticmethod
    def validate_request(content: Optional[str], url: Optional[str]) -> str:
        """
        Check the request fields and return the source article's domain.

        Raises:
            ValidationError: url or content missing, or url has no host
        """
        if not url or not url.strip():
            raise ValidationError("Original article URL is required")
        if not content or not content.strip():
            raise ValidationError("Original article content is required for analysis.")

        domain = URLUtils.get_domain(url)
        if not domain:
            raise ValidationError(f"Original article URL is not a valid absolute URL: {url}")
        return domain

    async def run(self, content: Optional[str], url: Optional[str]) -> PivotResult:
        """
        Run the full pipeline for one article.

        Args:
            content: Article text
            url: Article URL, its domain is excluded from results

        Returns:
            PivotResult; an empty candidate list is a valid outcome
        """
        original_domain = self.validate_request(content, url)
        logger.info(f"Starting pivot pipeline for {url}", content_length=len(content))

        step_start = time.perf_counter()
        topic = await self.topic_extractor.extract(content)
        log_pipeline_step(
            logger,
            "topic_extraction",
            {"topic": topic.topic, "opposing_terms": len(topic.opposing_terms)},
            time.perf_counter() - step_start,
        )

        step_start = time.perf_counter()
        outcome = await self.searcher.search(topic, original_domain)
        log_pipeline_step(
            logger,
            "search",
            {
                "queries": len(outcome.executed_queries),
                "candidates": len(outcome.candidates),
            },
            time.perf_counter() - step_start,
        )

        ranked = self.ranker.rank(outcome.candidates, original_domain)
        log_pipeline_step(logger, "ranking", {"results": len(ranked)})

        return PivotResult(
            candidates=ranked,
            search_query=" | ".join(outcome.queries),
            main_topic=topic.topic,
            opposing_keywords=topic.opposing_terms,
            total_articles_found=len(outcome.candidates),
        )


def build_pivot_pipeline(
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> PivotPipeline:
    """Wire a PivotPipeline from settings."""
    settings = settings or get_settings()
    return PivotPipeline(
        topic_extractor=TopicExtractor(build_text_provider(settings, client), settings),
        searcher=MultiSourceSearcher(build_search_providers(settings, client), settings),
        ranker=ResultRanker(max_results=settings.max_results),
    )
