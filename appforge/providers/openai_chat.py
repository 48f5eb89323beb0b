"""
OpenAI chat provider.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import openai

from ..core.exceptions import ProviderCallError, ProviderConfigurationError
from ..core.logging import get_logger
from .base import TextProvider
from .registry import ProviderRegistry

if TYPE_CHECKING:
    from ..core.config import Config, ProviderConfig

logger = get_logger(__name__)


@ProviderRegistry.register
class OpenAIProvider(TextProvider):
    """Chat-completions backed provider."""

    NAME = "openai"

    def __init__(self, settings: ProviderConfig, api_key: str | None = None, client: Any = None) -> None:
        if client is None:
            if not api_key:
                raise ProviderConfigurationError(
                    message="OpenAI API not configured. Please set OPENAI_API_KEY in .env file.",
                    provider_name=self.NAME,
                )
            client = openai.AsyncOpenAI(api_key=api_key)
        self.settings = settings
        self._client = client

    @classmethod
    def from_config(cls, config: Config) -> OpenAIProvider:
        api_key = config.openai_api_key.get_secret_value() if config.openai_api_key else None
        return cls(config.provider, api_key=api_key)

    async def generate_text(self, prompt: str) -> str:
        logger.info(
            "LLM request starting",
            provider=self.NAME,
            model=self.settings.openai_model,
            temperature=self.settings.temperature,
            prompt_chars=len(prompt),
        )
        try:
            response = await self._client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.settings.temperature,
                max_completion_tokens=self.settings.max_output_tokens,
            )
        except openai.OpenAIError as e:
            raise ProviderCallError(
                message=f"OpenAI API error: {e}", provider_name=self.NAME, cause=e
            ) from e

        text = response.choices[0].message.content if response.choices else None
        if not text:
            raise ProviderCallError(message="No text generated in OpenAI response", provider_name=self.NAME)

        logger.info(
            "LLM response received",
            provider=self.NAME,
            response_chars=len(text),
            finish_reason=response.choices[0].finish_reason,
        )
        return text
