"""
Anthropic messages provider.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import anthropic

from ..core.exceptions import ProviderCallError, ProviderConfigurationError
from ..core.logging import get_logger
from .base import TextProvider
from .registry import ProviderRegistry

if TYPE_CHECKING:
    from ..core.config import Config, ProviderConfig

logger = get_logger(__name__)


@ProviderRegistry.register
class AnthropicProvider(TextProvider):
    """Messages-API backed provider."""

    NAME = "anthropic"

    def __init__(self, settings: ProviderConfig, api_key: str | None = None, client: Any = None) -> None:
        if client is None:
            if not api_key:
                raise ProviderConfigurationError(
                    message="Anthropic API not configured. Please set ANTHROPIC_API_KEY in .env file.",
                    provider_name=self.NAME,
                )
            client = anthropic.AsyncAnthropic(api_key=api_key)
        self.settings = settings
        self._client = client

    @classmethod
    def from_config(cls, config: Config) -> AnthropicProvider:
        api_key = config.anthropic_api_key.get_secret_value() if config.anthropic_api_key else None
        return cls(config.provider, api_key=api_key)

    async def generate_text(self, prompt: str) -> str:
        logger.info(
            "LLM request starting",
            provider=self.NAME,
            model=self.settings.anthropic_model,
            max_tokens=self.settings.max_output_tokens,
            prompt_chars=len(prompt),
        )
        try:
            response = await self._client.messages.create(
                model=self.settings.anthropic_model,
                max_tokens=self.settings.max_output_tokens,
                temperature=min(self.settings.temperature, 1.0),
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AnthropicError as e:
            raise ProviderCallError(
                message=f"Anthropic API error: {e}", provider_name=self.NAME, cause=e
            ) from e

        text_parts = [block.text for block in response.content if getattr(block, "type", None) == "text"]
        if not text_parts:
            raise ProviderCallError(message="No text generated in Anthropic response", provider_name=self.NAME)

        text = "".join(text_parts)
        logger.info(
            "LLM response received",
            provider=self.NAME,
            response_chars=len(text),
            stop_reason=response.stop_reason,
        )
        return text
