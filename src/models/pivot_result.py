from typing import List
from pydantic import BaseModel, Field

from .article_candidate import ArticleCandidate


class SearchOutcome(BaseModel):
    """Everything the multi-source searcher found, before ranking."""

    queries: List[str] = Field(default_factory=list)
    executed_queries: List[str] = Field(default_factory=list)
    candidates: List[ArticleCandidate] = Field(default_factory=list)


class PivotResult(BaseModel):
    """Output of the opposing-viewpoint pipeline."""

    candidates: List[ArticleCandidate] = Field(default_factory=list)
    search_query: str = ""
    main_topic: str
    opposing_keywords: List[str] = Field(default_factory=list)
    total_articles_found: int = 0
