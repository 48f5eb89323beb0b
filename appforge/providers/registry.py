"""
Provider registry and resolution.

Provider classes register themselves by name; a ``ProviderResolver`` bound to
one configuration turns request-time provider names into cached instances.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.exceptions import ProviderConfigurationError
from ..core.logging import get_logger

if TYPE_CHECKING:
    from ..core.config import Config
    from .base import TextProvider

logger = get_logger(__name__)

# Global registry of provider classes
_PROVIDER_REGISTRY: dict[str, type[TextProvider]] = {}

HOSTED_PROVIDER = "gemini"


class ProviderRegistry:
    """Registry for managing provider types."""

    @classmethod
    def register(cls, provider_class: type[TextProvider]) -> type[TextProvider]:
        """Register a provider class.

        Can be used as a decorator:
            @ProviderRegistry.register
            class MyProvider(TextProvider):
                NAME = "mine"

        Args:
            provider_class: The provider class to register.

        Returns:
            The registered provider class (allows use as a decorator).
        """
        name = getattr(provider_class, "NAME", "") or provider_class.__name__
        _PROVIDER_REGISTRY[name.lower()] = provider_class
        return provider_class

    @classmethod
    def get(cls, name: str) -> type[TextProvider] | None:
        return _PROVIDER_REGISTRY.get(name.lower())

    @classmethod
    def list_providers(cls) -> list[str]:
        return sorted(_PROVIDER_REGISTRY)


class ProviderResolver:
    """Resolves provider names to configured instances for one deployment.

    In ``hosted`` deployments the Gemini credential is checked when the
    resolver is built, and every request is served by Gemini regardless of the
    name asked for.
    """

    def __init__(self, config: Config) -> None:
        """Initialize the resolver.

        Args:
            config: Application configuration

        Raises:
            ProviderConfigurationError: In hosted mode, if Gemini is not configured.
        """
        self.config = config
        self._instances: dict[str, TextProvider] = {}

        if self.hosted:
            # Fail at startup rather than on the first request.
            self._instances[HOSTED_PROVIDER] = self._build(HOSTED_PROVIDER)
            logger.info("Hosted deployment: all requests use Gemini")

    @property
    def hosted(self) -> bool:
        return self.config.provider.deployment == "hosted"

    def install(self, provider: TextProvider) -> None:
        """Use a pre-built provider instance for its name."""
        self._instances[provider.get_name().lower()] = provider

    def available(self) -> list[str]:
        return sorted(set(ProviderRegistry.list_providers()) | set(self._instances))

    def normalize(self, name: str | None) -> str:
        """Map a requested name to the provider that will actually serve it."""
        requested = (name or self.config.provider.default_provider).strip().lower()
        if self.hosted and requested != HOSTED_PROVIDER:
            logger.warning(
                "Provider not supported in hosted deployment, using Gemini instead",
                requested=requested,
            )
            return HOSTED_PROVIDER
        return requested

    def resolve(self, name: str | None) -> TextProvider:
        """Get the provider instance for a requested name.

        Raises:
            ProviderConfigurationError: If the name is unknown or the provider
                is missing its configuration.
        """
        resolved = self.normalize(name)
        if resolved not in self._instances:
            self._instances[resolved] = self._build(resolved)
        return self._instances[resolved]

    def _build(self, name: str) -> TextProvider:
        provider_class = ProviderRegistry.get(name)
        if provider_class is None:
            raise ProviderConfigurationError(
                message=(
                    f"Unknown AI provider: {name}. "
                    f"Supported providers: {', '.join(self.available())}"
                ),
                provider_name=name,
            )
        provider = provider_class.from_config(self.config)
        logger.debug("Provider initialized", provider=name)
        return provider
