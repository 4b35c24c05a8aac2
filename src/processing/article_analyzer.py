"""
Article analyzer for the Pivot API.

Summaries and critical insights for an article, generated by the
text-generation provider and memoized per content prefix.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from src.config import Settings, get_service_logger, get_settings
from src.core.exceptions import ConfigurationError
from src.providers import TextGenerationProvider
from src.services import ResultCache, NullCache
from src.utils import make_cache_key

logger = get_service_logger(__name__)

TRUNCATION_MARKER = "...[truncated]"

SUMMARY_PROMPT = (
    "Summarize this article in 3-4 concise bullet points. "
    "Focus on the most important facts and key takeaways:\n\n{content}"
)

INSIGHTS_PROMPT = """Analyze this article concisely. Structure your response exactly like this:

**Main Arguments**: What are the 2-3 central claims or points?

**Evidence Quality**: How well supported are the arguments? Mention key data/sources if present.

**Potential Bias**: What perspectives or limitations might be present?

**Key Questions**: What important aspects are left unaddressed?

Keep each section brief and focused.

---

{content}"""


@dataclass(frozen=True)
class AnalysisMode:
    """Prompt and model parameters for one kind of analysis."""

    name: str
    default_title: str
    prompt: str
    model: str
    max_tokens: int
    temperature: float
    max_chars: int


def build_modes(settings: Settings) -> Dict[str, AnalysisMode]:
    return {
        "summary": AnalysisMode(
            name="summary",
            default_title="Summary",
            prompt=SUMMARY_PROMPT,
            model=settings.summary_model,
            max_tokens=settings.summary_max_tokens,
            temperature=settings.summary_temperature,
            max_chars=settings.summary_max_chars,
        ),
        "insights": AnalysisMode(
            name="insights",
            default_title="Insights",
            prompt=INSIGHTS_PROMPT,
            model=settings.insights_model,
            max_tokens=settings.insights_max_tokens,
            temperature=settings.insights_temperature,
            max_chars=settings.insights_max_chars,
        ),
    }


def truncate_content(content: str, max_chars: int) -> str:
    if len(content) > max_chars:
        return content[:max_chars] + TRUNCATION_MARKER
    return content


class ArticleAnalyzer:
    """Runs summary/insights prompts with result memoization."""

    def __init__(
        self,
        provider: TextGenerationProvider,
        cache: Optional[ResultCache] = None,
        settings: Optional[Settings] = None,
    ):
        self.provider = provider
        self.cache = cache if cache is not None else NullCache()
        self.settings = settings or get_settings()
        self.modes = build_modes(self.settings)

    def mode(self, name: str) -> AnalysisMode:
        return self.modes[name]

    async def analyze(self, mode_name: str, content: str) -> Tuple[str, bool]:
        """
        Run one analysis over the article.

        Returns:
            (result text, True when served from cache)

        Raises:
            ConfigurationError: provider has no credential
            ProviderError / MalformedResponseError: provider call failed
        """
        mode = self.mode(mode_name)
        key = make_cache_key(mode.name, content, self.settings.cache_key_chars)

        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Cache hit for {mode.name}", key=key)
            return cached, True

        if not self.provider.available:
            raise ConfigurationError("API key not configured")

        async def compute() -> str:
            truncated = truncate_content(content, mode.max_chars)
            logger.info(
                f"Processing {mode.name} for content length: {len(truncated)}"
            )
            return await self.provider.generate(
                mode.prompt.format(content=truncated),
                model=mode.model,
                max_tokens=mode.max_tokens,
                temperature=mode.temperature,
            )

        return await self.cache.get_or_compute(key, compute)

    async def summarize(self, content: str) -> Tuple[str, bool]:
        return await self.analyze("summary", content)

    async def insights(self, content: str) -> Tuple[str, bool]:
        return await self.analyze("insights", content)
