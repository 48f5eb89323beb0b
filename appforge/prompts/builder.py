"""
Prompt builder.

Assembles the base prompt for each operation and applies provider
enhancement.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..core.logging import get_logger
from .enhancement import enhance_for_provider
from .templates import (
    IMPROVE_TEMPLATE,
    NAMING_TEMPLATE,
    PromptTemplate,
    edit_template,
    generation_template,
)

logger = get_logger(__name__)

DEFAULT_IMAGE_API = "http://localhost:3001/api/gemini"


class PromptBuilder:
    """Builds prompts for the naming, generation, edit and improve operations."""

    def __init__(
        self,
        enhanced_providers: Iterable[str] = ("gemini",),
        image_api: str = DEFAULT_IMAGE_API,
    ) -> None:
        """Initialize the builder.

        Args:
            enhanced_providers: Providers that receive the design-system block
            image_api: Base URL of the image endpoints generated apps call
        """
        self.enhanced_providers = [name.lower() for name in enhanced_providers]
        self._generation = generation_template(image_api.rstrip("/"))
        self._edit = edit_template(image_api.rstrip("/"))

    def _render(self, template: PromptTemplate, **kwargs: Any) -> str:
        prompt = template.render(**kwargs)
        logger.debug(
            "Prompt built",
            template_id=template.template_id,
            template_version=template.version,
            template_hash=template.get_hash(),
            chars=len(prompt),
        )
        return prompt

    def naming_prompt(self, description: str) -> str:
        return self._render(NAMING_TEMPLATE, description=description)

    def generation_prompt(self, description: str, component_name: str) -> str:
        return self._render(self._generation, description=description, component_name=component_name)

    def edit_prompt(self, current_source: str, instructions: str, component_name: str) -> str:
        return self._render(
            self._edit,
            current_source=current_source,
            instructions=instructions,
            component_name=component_name,
        )

    def improve_prompt(self, raw_description: str) -> str:
        return self._render(IMPROVE_TEMPLATE, raw_description=raw_description)

    def enhance(self, base_prompt: str, provider_name: str) -> str:
        """Apply provider-specific enhancement (base prompt first, then the block)."""
        enhanced = enhance_for_provider(base_prompt, provider_name, self.enhanced_providers)
        if enhanced is not base_prompt:
            logger.debug(
                "Prompt enhanced for provider",
                provider=provider_name,
                added_chars=len(enhanced) - len(base_prompt),
            )
        return enhanced
