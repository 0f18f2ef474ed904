"""
Chat-completion client used for incident analysis.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from incident_hub.clients.base_client import BaseHTTPClient
from incident_hub.core.config import CompletionSettings
from incident_hub.core.constants import MessageRole
from incident_hub.core.exceptions import CompletionServiceError, ConfigurationError, UpstreamError
from incident_hub.core.logging import get_logger

logger = get_logger(__name__)


class BaseCompletionClient(ABC):
    """Interface for a single-shot chat completion."""

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Return the raw text of the model's reply.

        Raises:
            ConfigurationError: If no credential is configured
            CompletionServiceError: On transport or response-format failure
        """
        ...

    async def close(self) -> None:
        pass


class ChatCompletionClient(BaseHTTPClient, BaseCompletionClient):
    """
    Client for an OpenAI-compatible ``/chat/completions`` endpoint
    (Together AI by default).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.together.xyz/v1",
        model: str = "deepseek-ai/deepseek-r1-distill-llama-70b",
        temperature: float = 0.7,
        max_tokens: int = 500,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(base_url=base_url, timeout=timeout, transport=transport)
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings: CompletionSettings) -> "ChatCompletionClient":
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            model=settings.model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.timeout,
        )

    @property
    def service_name(self) -> str:
        return "Completion service"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _error(
        self,
        message: str,
        details: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> UpstreamError:
        return CompletionServiceError(message, details=details, context=context)

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        # Only reached on a cache miss; fresh cached analyses are served without a key.
        if not self.is_configured:
            logger.error("Completion API key is not set")
            raise ConfigurationError(
                "AI service configuration error",
                details="Completion service API key is not configured",
            )

        payload = {
            "model": self.model,
            "messages": [
                {"role": MessageRole.SYSTEM.value, "content": system_prompt},
                {"role": MessageRole.USER.value, "content": user_prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        logger.info("Sending completion request", model=self.model)
        response = await self._request(
            "POST",
            "/chat/completions",
            json=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise CompletionServiceError(
                "Invalid response format from completion API",
                details=response.text[:500],
            ) from e

        if not isinstance(content, str) or not content:
            raise CompletionServiceError("Invalid response format from completion API")

        logger.info("Received completion response", length=len(content))
        return content
