"""Shared services for the Pivot API."""
from .result_cache import ResultCache, NullCache

__all__ = ["ResultCache", "NullCache"]
