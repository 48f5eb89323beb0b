"""
Base provider abstraction.

A provider turns a text prompt into generated text. Image-capable providers
additionally generate and edit images.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from ..core.config import Config
    from ..models.generation import GeneratedImage


class TextProvider(ABC):
    """Base class for all text-generation providers.

    Subclasses set ``NAME`` (the selection key) and implement
    ``generate_text``; ``from_config`` builds an instance from application
    configuration and raises ``ProviderConfigurationError`` when a required
    credential is missing.
    """

    NAME: ClassVar[str] = ""

    @classmethod
    @abstractmethod
    def from_config(cls, config: Config) -> TextProvider:
        """Create a provider from configuration.

        Args:
            config: Application configuration.

        Returns:
            A ready-to-use provider instance.

        Raises:
            ProviderConfigurationError: If the provider cannot be configured.
        """
        ...

    @abstractmethod
    async def generate_text(self, prompt: str) -> str:
        """Generate text for a prompt.

        Args:
            prompt: Full prompt text.

        Returns:
            The generated text, unmodified.

        Raises:
            ProviderCallError: If the upstream call fails or yields no text.
        """
        ...

    def get_name(self) -> str:
        return self.NAME

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.get_name()!r})"


class ImageCapable(ABC):
    """Mixin for providers that can also produce images."""

    @abstractmethod
    async def generate_image(self, prompt: str, aspect_ratio: str | None = None) -> GeneratedImage:
        """Generate an image from a text prompt."""
        ...

    @abstractmethod
    async def edit_image(self, prompt: str, image: bytes, mime_type: str = "image/png") -> GeneratedImage:
        """Edit an input image according to a text prompt."""
        ...
