"""
Topic extractor for the Pivot API.

Asks a text-generation provider for the core subject of an article and a
handful of opposing-viewpoint search terms.
"""

from typing import Any, Dict, List, Optional

from src.config import Settings, get_service_logger, get_settings
from src.core.exceptions import ConfigurationError, MalformedResponseError, MissingTopicError
from src.models import TopicExtractionResult
from src.providers import TextGenerationProvider
from src.utils import extract_json_object

logger = get_service_logger(__name__)


ANALYSIS_PROMPT = """You are an expert article analyzer. Your task is to identify the core subject of an article and then generate keywords that represent opposing viewpoints for a news search.

Analyze the following article content:
{content}

Based on this, identify:
1. The core subject of the article (as a concise phrase, max 10 words). This will be the main search term.
2. Generate 3-5 *short, commonly used* keywords or phrases that capture a *direct opposing viewpoint* or a strong counter-argument to the article's core subject/stance. These should be terms that a journalist or commentator with an opposite view might use.

Provide the output as a JSON object with the following keys: "core_subject" (string) and "opposing_terms" (array of strings). Your response MUST be valid JSON and contain ONLY the JSON object. Do not include any other text, preamble, or markdown formatting (e.g., no ```json)."""

TOPIC_SCHEMA_NAME = "record_topic_analysis"

TOPIC_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "core_subject": {
            "type": "string",
            "description": "Core subject of the article, max 10 words",
        },
        "opposing_terms": {
            "type": "array",
            "items": {"type": "string"},
            "description": "3-5 short opposing-viewpoint keywords or phrases",
        },
    },
    "required": ["core_subject", "opposing_terms"],
}


class TopicExtractor:
    """
    Extracts a neutral topic phrase and opposing keywords from article text.

    Prefers the provider's schema-constrained output; falls back to parsing
    free text as JSON.
    """

    def __init__(
        self,
        provider: TextGenerationProvider,
        settings: Optional[Settings] = None,
    ):
        self.provider = provider
        self.settings = settings or get_settings()
        self.content_chars = self.settings.topic_content_chars

    def build_prompt(self, content: str) -> str:
        return ANALYSIS_PROMPT.format(content=content[: self.content_chars])

    async def extract(self, content: str) -> TopicExtractionResult:
        """
        Extract the topic of an article.

        Args:
            content: Article text; only the first topic_content_chars are sent

        Returns:
            TopicExtractionResult

        Raises:
            ConfigurationError: provider has no credential
            ProviderError: provider returned a non-success status
            MalformedResponseError: response is not the expected JSON
            MissingTopicError: response has no core_subject
        """
        if not self.provider.available:
            raise ConfigurationError(
                f"{self.provider.name} API key is not configured on the server."
            )

        prompt = self.build_prompt(content)
        use_structured = (
            self.settings.topic_structured_output
            and self.provider.supports_structured_output
        )

        if use_structured:
            data = await self.provider.generate_structured(
                prompt,
                schema=TOPIC_SCHEMA,
                schema_name=TOPIC_SCHEMA_NAME,
                model=self.settings.topic_model,
                max_tokens=self.settings.topic_max_tokens,
                temperature=self.settings.topic_temperature,
            )
        else:
            raw = await self.provider.generate(
                prompt,
                model=self.settings.topic_model,
                max_tokens=self.settings.topic_max_tokens,
                temperature=self.settings.topic_temperature,
            )
            try:
                data = extract_json_object(raw)
            except MalformedResponseError:
                logger.error("Failed to parse topic analysis output", raw=raw[:200])
                raise

        return self.parse_result(data)

    @staticmethod
    def parse_result(data: Dict[str, Any]) -> TopicExtractionResult:
        """Validate the provider's object into a TopicExtractionResult."""
        topic = data.get("core_subject")
        if not isinstance(topic, str) or not topic.strip():
            raise MissingTopicError("Could not extract main topic from the article analysis.")

        terms = _clean_terms(data.get("opposing_terms"))
        if not terms:
            logger.warning(
                "No opposing terms extracted, falling back to topic-only queries",
                topic=topic,
            )

        logger.info("Extracted main topic", topic=topic.strip(), opposing_terms=terms)
        return TopicExtractionResult(topic=topic.strip(), opposing_terms=terms)


def _clean_terms(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [term.strip() for term in value if isinstance(term, str) and term.strip()]
