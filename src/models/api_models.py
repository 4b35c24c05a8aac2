"""
Request and response models for the HTTP API.

Request fields are optional at the schema level so that a missing field is
reported through the uniform error envelope with a 400, not a framework 422.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .article_candidate import ArticleCandidate


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PivotRequest(BaseModel):
    content: Optional[str] = None
    url: Optional[str] = None


class AnalyzeRequest(BaseModel):
    content: Optional[str] = None
    title: Optional[str] = None


class PivotResponse(_CamelModel):
    """Response model for the opposing-viewpoint search."""

    success: bool = True
    result: List[ArticleCandidate]
    search_query: str
    main_topic: str
    opposing_keywords: List[str]
    total_articles_found: int
    processing_time: int
    message: Optional[str] = None


class AnalysisResponse(_CamelModel):
    """Response model for summarize and insights."""

    success: bool = True
    result: str
    title: str
    cached: Optional[bool] = None
    processing_time: int


class ErrorResponse(_CamelModel):
    """Uniform failure envelope."""

    success: bool = False
    error: str
    processing_time: int
