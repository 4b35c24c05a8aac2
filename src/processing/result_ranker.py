"""
Result normalizer and ranker for the Pivot API.
"""

from typing import List, Optional, Set

from src.config import get_service_logger
from src.models import ArticleCandidate

logger = get_service_logger(__name__)


class ResultRanker:
    """
    Turns raw candidates into the final result set: drop the source domain,
    deduplicate by URL (first occurrence wins), stable-sort by score
    descending, keep the top max_results.
    """

    def __init__(self, max_results: int = 4):
        self.max_results = max_results

    def rank(
        self,
        candidates: List[ArticleCandidate],
        exclude_domain: Optional[str] = None,
    ) -> List[ArticleCandidate]:
        seen: Set[str] = set()
        unique: List[ArticleCandidate] = []
        for candidate in candidates:
            if exclude_domain and candidate.source_domain == exclude_domain:
                continue
            if candidate.url in seen:
                continue
            seen.add(candidate.url)
            unique.append(candidate)

        # sorted() is stable, equal scores keep discovery order
        ranked = sorted(unique, key=lambda c: c.relevance_score, reverse=True)
        top = ranked[: self.max_results]

        logger.info(
            f"Found {len(top)} unique relevant articles",
            candidates=len(candidates),
            unique=len(unique),
            with_images=sum(1 for c in top if c.image_url),
        )
        return top
