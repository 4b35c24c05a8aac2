from .article_candidate import ArticleCandidate
from .topic_result import TopicExtractionResult
from .pivot_result import SearchOutcome, PivotResult
from .api_models import (
    PivotRequest,
    AnalyzeRequest,
    PivotResponse,
    AnalysisResponse,
    ErrorResponse,
)

__all__ = [
    "ArticleCandidate",
    "TopicExtractionResult",
    "SearchOutcome",
    "PivotResult",
    "PivotRequest",
    "AnalyzeRequest",
    "PivotResponse",
    "AnalysisResponse",
    "ErrorResponse",
]
