"""
Configuration settings for the Pivot API.

Uses pydantic-settings for configuration management with environment
variable support and validation.
"""

from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="production", description="Runtime environment")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")
    log_rotation: str = Field(
        default="daily", description="Log rotation policy (daily, weekly, monthly)"
    )
    log_retention: int = Field(default=7, description="Number of rotated log files")

    # Text generation (Claude)
    claude_api_key: str = Field(default="", description="Anthropic API key")
    claude_api_url: str = Field(
        default="https://api.anthropic.com/v1/messages",
        description="Anthropic Messages endpoint",
    )
    claude_api_version: str = Field(
        default="2023-06-01", description="anthropic-version header"
    )
    llm_timeout: float = Field(
        default=30.0, description="Text generation call timeout in seconds"
    )

    topic_model: str = Field(default="claude-sonnet-4-20250514")
    topic_max_tokens: int = Field(default=500)
    topic_temperature: float = Field(default=0.5)
    topic_content_chars: int = Field(
        default=4000, description="Characters of article text sent for topic extraction"
    )
    topic_structured_output: bool = Field(
        default=True, description="Ask for tool-constrained JSON when supported"
    )

    summary_model: str = Field(default="claude-3-haiku-20240307")
    summary_max_tokens: int = Field(default=600)
    summary_temperature: float = Field(default=0.2)
    summary_max_chars: int = Field(default=6000)

    insights_model: str = Field(default="claude-3-5-sonnet-20240620")
    insights_max_tokens: int = Field(default=800)
    insights_temperature: float = Field(default=0.3)
    insights_max_chars: int = Field(default=7000)

    # Search providers
    brave_api_key: str = Field(default="", description="Brave Search subscription token")
    newsapi_key: str = Field(default="", description="NewsAPI key")
    gnews_api_key: str = Field(default="", description="GNews key")
    tavily_api_key: str = Field(default="", description="Tavily key")
    perplexity_api_key: str = Field(default="", description="Perplexity key")
    perplexity_model: str = Field(default="sonar")
    search_provider_order: str = Field(
        default="brave,newsapi,gnews",
        description="Comma-separated provider names in priority order",
    )

    # Per-provider weights used when a provider has no native relevance score
    brave_score: float = Field(default=0.8)
    newsapi_score: float = Field(default=0.6)
    gnews_score: float = Field(default=0.7)
    tavily_default_score: float = Field(default=0.75)
    perplexity_score: float = Field(default=0.65)

    # Search pipeline
    min_results_per_query: int = Field(
        default=3, description="Stop the provider cascade once a query has this many"
    )
    max_search_queries: int = Field(default=4, description="Queries constructed")
    max_executed_queries: int = Field(default=2, description="Queries executed")
    query_delay: float = Field(
        default=0.2, description="Flat delay between query executions in seconds"
    )
    search_concurrent_queries: bool = Field(
        default=False, description="Run executed queries concurrently"
    )
    provider_timeout: float = Field(
        default=8.0, description="Per provider call timeout in seconds"
    )
    max_results: int = Field(default=4, description="Articles returned by pivot")
    description_max_chars: int = Field(default=200)
    link_preview_url: str = Field(
        default="https://api.microlink.io/?url={url}&meta=false&embed=image.url",
        description="Image fallback template, {url} is percent-encoded",
    )

    # Result cache
    cache_enabled: bool = Field(default=True)
    cache_max_entries: int = Field(default=256)
    cache_ttl_seconds: float = Field(default=3600.0)
    cache_key_chars: int = Field(
        default=200, description="Leading characters of content hashed into the key"
    )

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def search_providers(self) -> List[str]:
        """Provider names from search_provider_order, lower-cased, in order."""
        return [
            name.strip().lower()
            for name in self.search_provider_order.split(",")
            if name.strip()
        ]

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
