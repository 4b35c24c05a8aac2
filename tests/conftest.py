"""
Pytest configuration and fixtures for Pivot API tests.

Provides common fixtures and test configuration for all test modules.
"""

import json
from typing import List, Optional

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.config.settings import Settings
from src.models import ArticleCandidate
from src.providers import ClaudeProvider, SearchProvider
from src.utils import URLUtils


@pytest.fixture
def test_settings():
    """Test settings configuration."""
    return Settings(
        claude_api_key="test-claude-key",
        brave_api_key="test-brave-key",
        newsapi_key="test-newsapi-key",
        gnews_api_key="test-gnews-key",
        search_provider_order="brave,newsapi,gnews",
        topic_structured_output=False,
        query_delay=0.0,
        provider_timeout=1.0,
        log_level="DEBUG",
        cache_enabled=True,
    )


@pytest.fixture
def topic_payload():
    """Topic analysis as the text provider returns it."""
    return {
        "core_subject": "Municipal four-day work week pilot",
        "opposing_terms": [
            "productivity loss",
            "taxpayer cost",
            "service delays",
        ],
    }


@pytest.fixture
def mock_text_provider(topic_payload):
    """Mock text-generation provider returning the topic payload as text."""
    provider = MagicMock(spec=ClaudeProvider)
    provider.name = "Claude"
    provider.available = True
    provider.supports_structured_output = False
    provider.generate = AsyncMock(return_value=json.dumps(topic_payload))
    provider.generate_structured = AsyncMock(return_value=topic_payload)
    return provider


@pytest.fixture
def candidate_factory():
    """Build ArticleCandidates from a URL and score."""

    def _make(
        url: str,
        score: float = 0.8,
        title: Optional[str] = None,
        provider: str = "brave",
    ) -> ArticleCandidate:
        domain = URLUtils.get_domain(url)
        return ArticleCandidate(
            title=title or f"Article at {url}",
            url=url,
            published_date="2025-01-01T00:00:00Z",
            description="Test description",
            source_domain=domain,
            source_name=URLUtils.derive_source_name(domain),
            relevance_score=score,
            provider=provider,
        )

    return _make


@pytest.fixture
def search_provider_factory():
    """Build mock search providers returning fixed candidates."""

    def _make(
        name: str,
        results: Optional[List[ArticleCandidate]] = None,
        available: bool = True,
    ):
        provider = MagicMock(spec=SearchProvider)
        provider.name = name
        provider.available = available
        provider.search = AsyncMock(return_value=list(results or []))
        return provider

    return _make


@pytest.fixture
def long_article():
    """A 5000 character article about a fictional policy."""
    paragraph = (
        "The city council of Riverton voted on Tuesday to extend its pilot "
        "of a four-day work week for municipal employees, citing improved "
        "retention and lower overtime costs. "
    )
    text = (paragraph * 40)[:4000] + "TAILMARKER" + ("z" * 990)
    assert len(text) == 5000
    return text


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names."""
    for item in items:
        if "integration" in item.name or "api" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
        if "slow" in item.name:
            item.add_marker(pytest.mark.slow)
