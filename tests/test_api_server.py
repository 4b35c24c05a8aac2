"""
Integration tests for the FastAPI server module.

Tests API endpoints, request/response handling, and error scenarios.
"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from src.api.server import (
    app,
    get_article_analyzer,
    get_pivot_pipeline,
)
from src.core.exceptions import ProviderError
from src.pipeline import NO_RESULTS_MESSAGE, PivotPipeline
from src.processing import ArticleAnalyzer, MultiSourceSearcher, ResultRanker, TopicExtractor
from src.services import ResultCache

CORS_EXPECTED = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "POST, OPTIONS",
    "access-control-allow-headers": "Content-Type",
    "access-control-max-age": "86400",
}


class TestAPIServer:
    """Test cases for FastAPI server endpoints."""

    @pytest.fixture
    def client(self):
        """Create a test client for the FastAPI app."""
        yield TestClient(app)
        app.dependency_overrides.clear()

    @pytest.fixture
    def brave(self, search_provider_factory, candidate_factory):
        return search_provider_factory(
            "brave",
            [
                candidate_factory("https://www.example.com/own", 0.8),
                candidate_factory("https://othernews.com/a", 0.8),
                candidate_factory("https://critics.org/b", 0.7),
            ],
        )

    @pytest.fixture
    def use_pipeline(self, test_settings, mock_text_provider):
        def _use(search_providers):
            pipeline = PivotPipeline(
                topic_extractor=TopicExtractor(mock_text_provider, test_settings),
                searcher=MultiSourceSearcher(search_providers, test_settings),
                ranker=ResultRanker(max_results=test_settings.max_results),
            )
            app.dependency_overrides[get_pivot_pipeline] = lambda: pipeline
            return pipeline

        return _use

    @pytest.fixture
    def analysis_provider(self, mock_text_provider, test_settings):
        mock_text_provider.generate = AsyncMock(return_value="- point one\n- point two")
        analyzer = ArticleAnalyzer(mock_text_provider, ResultCache(), test_settings)
        app.dependency_overrides[get_article_analyzer] = lambda: analyzer
        return mock_text_provider

    def test_root_endpoint(self, client):
        """Test the root endpoint."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Pivot API"
        assert data["version"] == "1.0.0"
        assert data["status"] == "operational"

    def test_health_reports_providers(self, client, test_settings):
        with patch("src.api.server.settings", test_settings):
            response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["providers"] == {
            "brave": True,
            "newsapi": True,
            "gnews": True,
            "Claude": True,
        }

    def test_health_degraded_without_keys(self, client, test_settings):
        test_settings.claude_api_key = ""
        with patch("src.api.server.settings", test_settings):
            response = client.get("/health")

        assert response.json()["status"] == "degraded"

    @pytest.mark.parametrize("path", ["/api/pivot", "/api/summarize", "/api/insights"])
    def test_preflight_headers(self, client, path):
        response = client.options(path)

        assert response.status_code == 200
        for header, value in CORS_EXPECTED.items():
            assert response.headers[header] == value

    @pytest.mark.parametrize(
        "requested_headers", ["content-type", "content-type,x-ext-version"]
    )
    def test_browser_preflight_headers(self, client, requested_headers):
        response = client.options(
            "/api/pivot",
            headers={
                "Origin": "chrome-extension://abc",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": requested_headers,
            },
        )

        assert response.status_code == 200
        for header, value in CORS_EXPECTED.items():
            assert response.headers[header] == value

    def test_post_response_carries_cors_headers_for_origin(
        self, client, analysis_provider
    ):
        response = client.post(
            "/api/summarize",
            json={"content": "Article"},
            headers={"Origin": "chrome-extension://abc"},
        )

        assert response.status_code == 200
        for header, value in CORS_EXPECTED.items():
            assert response.headers[header] == value

    def test_pivot_success(self, client, use_pipeline, brave, long_article):
        use_pipeline([brave])

        response = client.post(
            "/api/pivot",
            json={"content": long_article, "url": "https://example.com/article"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        data = response.json()
        assert data["success"] is True
        assert 0 < len(data["result"]) <= 4
        assert all(item["sourceDomain"] != "example.com" for item in data["result"])
        assert data["mainTopic"] == "Municipal four-day work week pilot"
        assert data["opposingKeywords"] == [
            "productivity loss",
            "taxpayer cost",
            "service delays",
        ]
        assert " | " in data["searchQuery"]
        assert data["totalArticlesFound"] == 6
        assert isinstance(data["processingTime"], int)
        assert "message" not in data

        first = data["result"][0]
        assert set(first) >= {
            "title",
            "url",
            "publishedDate",
            "description",
            "sourceDomain",
            "sourceName",
            "relevanceScore",
            "provider",
        }

    def test_pivot_no_results_has_message(self, client, use_pipeline, search_provider_factory):
        use_pipeline([search_provider_factory("brave", []), search_provider_factory("gnews", [])])

        response = client.post(
            "/api/pivot", json={"content": "Article", "url": "https://example.com/a"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["result"] == []
        assert data["message"] == NO_RESULTS_MESSAGE

    def test_pivot_empty_content(self, client, use_pipeline, brave, mock_text_provider):
        use_pipeline([brave])

        response = client.post(
            "/api/pivot", json={"content": "", "url": "https://example.com/a"}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Original article content is required for analysis."
        assert "processingTime" in data
        mock_text_provider.generate.assert_not_called()
        brave.search.assert_not_called()

    def test_pivot_missing_url(self, client, use_pipeline, brave):
        use_pipeline([brave])

        response = client.post("/api/pivot", json={"content": "Article"})

        assert response.status_code == 400
        assert response.json()["error"] == "Original article URL is required"

    def test_pivot_topic_provider_failure(self, client, use_pipeline, brave, mock_text_provider):
        mock_text_provider.generate = AsyncMock(
            side_effect=ProviderError(
                "Claude API failed with status 503: Service Unavailable", status=503
            )
        )
        use_pipeline([brave])

        response = client.post(
            "/api/pivot", json={"content": "Article", "url": "https://example.com/a"}
        )

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert "503" in data["error"]
        brave.search.assert_not_called()

    def test_pivot_invalid_json_body(self, client, use_pipeline, brave):
        use_pipeline([brave])

        response = client.post(
            "/api/pivot",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Invalid request body"

    def test_summarize_second_call_is_cached(self, client, analysis_provider):
        body = {"content": "A long article about a fictional policy.", "title": "Policy"}

        first = client.post("/api/summarize", json=body)
        second = client.post("/api/summarize", json=body)

        assert first.status_code == 200
        first_data = first.json()
        assert first_data["success"] is True
        assert first_data["result"] == "- point one\n- point two"
        assert first_data["title"] == "Policy"
        assert "cached" not in first_data

        assert second.json()["cached"] is True
        analysis_provider.generate.assert_awaited_once()

    def test_summarize_default_title(self, client, analysis_provider):
        response = client.post("/api/summarize", json={"content": "Article"})

        assert response.json()["title"] == "Summary"

    def test_summarize_empty_content(self, client, analysis_provider):
        response = client.post("/api/summarize", json={"content": "  "})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Content is required",
            "processingTime": response.json()["processingTime"],
        }
        analysis_provider.generate.assert_not_called()

    def test_insights_default_title(self, client, analysis_provider):
        response = client.post("/api/insights", json={"content": "Article"})

        assert response.status_code == 200
        assert response.json()["title"] == "Insights"

    def test_insights_without_key(self, client, analysis_provider):
        analysis_provider.available = False

        response = client.post("/api/insights", json={"content": "Article"})

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "API key not configured"

    def test_insights_provider_failure(self, client, analysis_provider):
        analysis_provider.generate = AsyncMock(
            side_effect=ProviderError("Claude API failed with status 529: overloaded", status=529)
        )

        response = client.post("/api/insights", json={"content": "Article"})

        assert response.status_code == 500
        assert "529" in response.json()["error"]
