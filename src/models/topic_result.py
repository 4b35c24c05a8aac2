from typing import List
from pydantic import BaseModel, Field


class TopicExtractionResult(BaseModel):
    """Core subject of an article plus short opposing-viewpoint phrases."""

    topic: str
    opposing_terms: List[str] = Field(default_factory=list)
