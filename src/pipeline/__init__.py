"""Pipeline orchestration module for the Pivot API."""
from .pivot_pipeline import PivotPipeline, build_pivot_pipeline, NO_RESULTS_MESSAGE

__all__ = ["PivotPipeline", "build_pivot_pipeline", "NO_RESULTS_MESSAGE"]
