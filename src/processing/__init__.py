"""Article processing stages for the Pivot API."""
from .topic_extractor import TopicExtractor
from .multi_source_searcher import MultiSourceSearcher, build_search_queries
from .result_ranker import ResultRanker
from .article_analyzer import ArticleAnalyzer, AnalysisMode, truncate_content

__all__ = [
    "TopicExtractor",
    "MultiSourceSearcher",
    "build_search_queries",
    "ResultRanker",
    "ArticleAnalyzer",
    "AnalysisMode",
    "truncate_content",
]
