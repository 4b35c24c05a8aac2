"""
Unit tests for the summary and insights analyzer.
"""

import pytest
from unittest.mock import AsyncMock

from src.core.exceptions import ConfigurationError, ProviderError
from src.processing import ArticleAnalyzer, truncate_content
from src.services import ResultCache


class TestTruncateContent:
    """Test cases for truncate_content."""

    def test_short_content_untouched(self):
        assert truncate_content("short", 10) == "short"

    def test_long_content_gets_marker(self):
        assert truncate_content("abcdefghij", 4) == "abcd...[truncated]"


class TestArticleAnalyzer:
    """Test cases for ArticleAnalyzer."""

    @pytest.fixture
    def provider(self, mock_text_provider):
        mock_text_provider.generate = AsyncMock(return_value="- point one\n- point two")
        return mock_text_provider

    @pytest.mark.asyncio
    async def test_summary_uses_summary_model(self, provider, test_settings):
        analyzer = ArticleAnalyzer(provider, ResultCache(), test_settings)
        text, cached = await analyzer.summarize("Article body")

        assert text == "- point one\n- point two"
        assert cached is False
        prompt = provider.generate.call_args.args[0]
        assert prompt.startswith("Summarize this article in 3-4 concise bullet points.")
        assert prompt.endswith("Article body")
        kwargs = provider.generate.call_args.kwargs
        assert kwargs["model"] == "claude-3-haiku-20240307"
        assert kwargs["max_tokens"] == 600
        assert kwargs["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_insights_prompt_and_model(self, provider, test_settings):
        analyzer = ArticleAnalyzer(provider, ResultCache(), test_settings)
        await analyzer.insights("Article body")

        prompt = provider.generate.call_args.args[0]
        assert "**Main Arguments**" in prompt
        assert "**Key Questions**" in prompt
        kwargs = provider.generate.call_args.kwargs
        assert kwargs["model"] == "claude-3-5-sonnet-20240620"
        assert kwargs["max_tokens"] == 800
        assert kwargs["temperature"] == 0.3

    @pytest.mark.asyncio
    async def test_long_content_is_truncated(self, provider, test_settings):
        analyzer = ArticleAnalyzer(provider, ResultCache(), test_settings)
        await analyzer.summarize("x" * 7000)

        prompt = provider.generate.call_args.args[0]
        assert prompt.endswith("x" * 6000 + "...[truncated]")
        assert "x" * 6001 not in prompt

    @pytest.mark.asyncio
    async def test_second_call_is_cached(self, provider, test_settings):
        analyzer = ArticleAnalyzer(provider, ResultCache(), test_settings)

        first = await analyzer.summarize("Same article")
        second = await analyzer.summarize("Same article")

        assert first == ("- point one\n- point two", False)
        assert second == ("- point one\n- point two", True)
        provider.generate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cache_key_uses_first_200_chars(self, provider, test_settings):
        analyzer = ArticleAnalyzer(provider, ResultCache(), test_settings)
        prefix = "p" * 200

        await analyzer.summarize(prefix + " ending one")
        _, cached = await analyzer.summarize(prefix + " a different ending")

        assert cached is True

    @pytest.mark.asyncio
    async def test_modes_have_separate_cache_entries(self, provider, test_settings):
        analyzer = ArticleAnalyzer(provider, ResultCache(), test_settings)

        await analyzer.summarize("Same article")
        _, cached = await analyzer.insights("Same article")

        assert cached is False
        assert provider.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_without_cache_every_call_hits_provider(self, provider, test_settings):
        analyzer = ArticleAnalyzer(provider, settings=test_settings)

        await analyzer.summarize("Same article")
        _, cached = await analyzer.summarize("Same article")

        assert cached is False
        assert provider.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_missing_key_raises_configuration_error(self, provider, test_settings):
        provider.available = False
        analyzer = ArticleAnalyzer(provider, ResultCache(), test_settings)

        with pytest.raises(ConfigurationError) as exc_info:
            await analyzer.insights("Article body")
        assert exc_info.value.message == "API key not configured"
        provider.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_failure_is_not_cached(self, provider, test_settings):
        provider.generate = AsyncMock(
            side_effect=[ProviderError("Claude API failed with status 503: busy", status=503), "ok"]
        )
        analyzer = ArticleAnalyzer(provider, ResultCache(), test_settings)

        with pytest.raises(ProviderError):
            await analyzer.summarize("Article body")
        assert await analyzer.summarize("Article body") == ("ok", False)
