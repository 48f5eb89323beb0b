"""
Gemini provider.

Text and image generation through the ``google-genai`` SDK's async client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

from google import genai
from google.genai import errors, types

from ..core.exceptions import ProviderCallError, ProviderConfigurationError
from ..core.logging import get_logger
from ..models.generation import GeneratedImage
from .base import ImageCapable, TextProvider
from .registry import ProviderRegistry

if TYPE_CHECKING:
    from ..core.config import Config, ProviderConfig

logger = get_logger(__name__)


@ProviderRegistry.register
class GeminiProvider(TextProvider, ImageCapable):
    """Google Gemini text and image provider."""

    NAME = "gemini"

    def __init__(self, settings: ProviderConfig, api_key: str | None = None, client: Any = None) -> None:
        """Initialize the provider.

        Args:
            settings: Provider section of the configuration
            api_key: Gemini API key; required unless ``client`` is given
            client: Pre-built ``genai.Client`` (or a test double)
        """
        if client is None:
            if not api_key:
                raise ProviderConfigurationError(
                    message="Gemini API not configured. Please set GEMINI_API_KEY in .env file.",
                    provider_name=self.NAME,
                )
            client = genai.Client(api_key=api_key)
        self.settings = settings
        self._client = client

    @classmethod
    def from_config(cls, config: Config) -> GeminiProvider:
        api_key = config.gemini_api_key.get_secret_value() if config.gemini_api_key else None
        return cls(config.provider, api_key=api_key)

    def _text_config(self) -> types.GenerateContentConfig:
        thinking = None
        if self.settings.thinking_level:
            thinking = types.ThinkingConfig(thinking_level=self.settings.thinking_level.upper())
        return types.GenerateContentConfig(
            temperature=self.settings.temperature,
            max_output_tokens=self.settings.max_output_tokens,
            thinking_config=thinking,
        )

    async def generate_text(self, prompt: str) -> str:
        logger.info(
            "LLM request starting",
            provider=self.NAME,
            model=self.settings.gemini_model,
            prompt_chars=len(prompt),
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self.settings.gemini_model,
                contents=prompt,
                config=self._text_config(),
            )
        except errors.APIError as e:
            raise ProviderCallError(
                message=f"Gemini API error: {e}", provider_name=self.NAME, cause=e
            ) from e

        candidates = getattr(response, "candidates", None) or []
        parts = _parts_of(candidates[0]) if candidates else []
        # Thought summaries are not part of the answer.
        text_parts = [
            part.text
            for part in parts
            if getattr(part, "text", None) and not getattr(part, "thought", False)
        ]
        if not text_parts:
            raise ProviderCallError(message="No text generated in Gemini response", provider_name=self.NAME)

        text = "".join(text_parts)
        logger.info("LLM response received", provider=self.NAME, response_chars=len(text))
        return text

    async def generate_image(self, prompt: str, aspect_ratio: str | None = None) -> GeneratedImage:
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE"],
            image_config=types.ImageConfig(aspect_ratio=aspect_ratio) if aspect_ratio else None,
        )
        return await self._request_image(prompt, config, operation="generate")

    async def edit_image(self, prompt: str, image: bytes, mime_type: str = "image/png") -> GeneratedImage:
        contents = [prompt, types.Part.from_bytes(data=image, mime_type=mime_type)]
        config = types.GenerateContentConfig(response_modalities=["IMAGE"])
        return await self._request_image(contents, config, operation="edit")

    async def _request_image(
        self, contents: Any, config: types.GenerateContentConfig, operation: str
    ) -> GeneratedImage:
        logger.info("Image request starting", provider=self.NAME, model=self.settings.gemini_image_model, operation=operation)
        try:
            response = await self._client.aio.models.generate_content(
                model=self.settings.gemini_image_model,
                contents=contents,
                config=config,
            )
        except errors.APIError as e:
            raise ProviderCallError(
                message=f"Gemini image {operation} error: {e}", provider_name=self.NAME, cause=e
            ) from e

        for candidate in getattr(response, "candidates", None) or []:
            for part in _parts_of(candidate):
                inline = getattr(part, "inline_data", None)
                if inline is not None and inline.data:
                    return GeneratedImage(data=inline.data, mime_type=inline.mime_type or "image/png")

        noun = "edited image" if operation == "edit" else "image"
        raise ProviderCallError(message=f"No {noun} generated in response", provider_name=self.NAME)


def _parts_of(candidate: Any) -> Iterator[Any]:
    content = getattr(candidate, "content", None)
    return iter(getattr(content, "parts", None) or [])
