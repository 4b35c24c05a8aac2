"""
Text-generation providers.

TextGenerationProvider is the capability the pipeline depends on: a prompt
goes in, text (or a schema-constrained object) comes out. Swapping the model
vendor is a configuration choice, not a code fork.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from src.config import get_service_logger
from src.core.exceptions import ConfigurationError, MalformedResponseError
from .base_client import BaseHTTPProvider

logger = get_service_logger(__name__)


class TextGenerationProvider(ABC):
    """Prompt in, text out."""

    name: str = "text"
    supports_structured_output: bool = False

    @property
    @abstractmethod
    def available(self) -> bool:
        ...

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        system: Optional[str] = None,
    ) -> str:
        ...

    async def generate_structured(
        self,
        prompt: str,
        *,
        schema: Dict[str, Any],
        schema_name: str,
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> Dict[str, Any]:
        """
        Return an object conforming to schema.

        Providers without a structured output mode raise ConfigurationError;
        callers check supports_structured_output first.
        """
        raise ConfigurationError(f"{self.name} has no structured output mode")


class ClaudeProvider(BaseHTTPProvider, TextGenerationProvider):
    """Anthropic Messages API client."""

    name = "Claude"
    supports_structured_output = True

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.anthropic.com/v1/messages",
        api_version: str = "2023-06-01",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(api_key=api_key, timeout=timeout, client=client)
        self.api_url = api_url
        self.api_version = api_version

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
            "content-type": "application/json",
        }

    async def _messages(self, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        data = await self._request_json(
            "POST", self.api_url, headers=self._headers(), json=payload
        )
        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, list) or not content:
            raise MalformedResponseError(
                "Claude response has no content blocks", raw=str(data)[:200]
            )
        if data.get("stop_reason") == "max_tokens":
            logger.warning(
                "Claude hit max tokens",
                model=payload.get("model"),
                max_tokens=payload.get("max_tokens"),
            )
        return content

    async def generate(
        self,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        system: Optional[str] = None,
    ) -> str:
        payload: Dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        if system:
            payload["system"] = system

        blocks = await self._messages(payload)
        text = blocks[0].get("text")
        if not isinstance(text, str):
            raise MalformedResponseError(
                "Claude response has no text block", raw=str(blocks)[:200]
            )
        return text

    async def generate_structured(
        self,
        prompt: str,
        *,
        schema: Dict[str, Any],
        schema_name: str,
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> Dict[str, Any]:
        """Force a single tool call and return its input as the structured result."""
        payload = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "tools": [
                {
                    "name": schema_name,
                    "description": "Record the analysis result.",
                    "input_schema": schema,
                }
            ],
            "tool_choice": {"type": "tool", "name": schema_name},
        }

        blocks = await self._messages(payload)
        for block in blocks:
            if block.get("type") == "tool_use" and isinstance(block.get("input"), dict):
                return block["input"]
        raise MalformedResponseError(
            "Claude response has no tool_use block", raw=str(blocks)[:200]
        )


class OpenAIChatProvider(BaseHTTPProvider, TextGenerationProvider):
    """Client for OpenAI-compatible chat completion endpoints."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        name: str = "OpenAIChat",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        extra_body: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(api_key=api_key, timeout=timeout, client=client)
        self.api_url = api_url
        self.name = name
        self.extra_body = extra_body or {}

    async def generate(
        self,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        system: Optional[str] = None,
        extra_body: Optional[Dict[str, Any]] = None,
    ) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        payload.update(self.extra_body)
        if extra_body:
            payload.update(extra_body)

        data = await self._request_json(
            "POST",
            self.api_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
        )
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError(
                f"{self.name} response has no message content", raw=str(data)[:200]
            ) from e
        if not isinstance(content, str):
            raise MalformedResponseError(
                f"{self.name} message content is not text", raw=str(content)[:200]
            )
        return content
