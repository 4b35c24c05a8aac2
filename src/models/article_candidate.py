from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ArticleCandidate(BaseModel):
    """
    A single article returned by a search provider, normalized to the shape
    the extension renders.

    Attributes:
        title (str): Headline, "No title" when the provider has none.
        url (str): Absolute article URL, the dedup identity key.
        published_date (str): ISO-8601 or provider free text ("2 hours ago").
        author (str | None): Byline when the provider supplies one.
        image_url (str | None): Provider image or a link-preview fallback.
        description (str): Snippet, truncated with "..." past the budget.
        source_domain (str): Host with the leading "www." stripped.
        source_name (str): Publisher display name.
        relevance_score (float): Native provider score or configured weight.
        provider (str): Name of the provider that returned it.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = "No title"
    url: str
    published_date: str
    author: Optional[str] = None
    image_url: Optional[str] = None
    description: str = ""
    source_domain: str
    source_name: str
    relevance_score: float = 0.0
    provider: str = ""
