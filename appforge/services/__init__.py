"""
AppForge services.

``build_services`` wires stores, the validation gate, the prompt builder and
the provider resolver from one configuration.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.config import Config
from ..prompts import PromptBuilder
from ..providers import ProviderResolver
from ..storage import CatalogStore, LocalFileStore
from ..validation import CheckerCommand, ValidationGate
from .generation import GenerationService
from .images import ImageService


@dataclass
class AppForgeServices:
    """Service instances sharing one configuration."""

    config: Config
    resolver: ProviderResolver
    generation: GenerationService
    images: ImageService


def build_services(config: Config, resolver: ProviderResolver | None = None) -> AppForgeServices:
    """Create the service graph for a configuration.

    Args:
        config: Application configuration
        resolver: Provider resolver to use; built from ``config`` when None

    Raises:
        ProviderConfigurationError: In hosted mode, if Gemini is not configured.
    """
    resolver = resolver or ProviderResolver(config)
    storage = config.storage

    generation = GenerationService(
        resolver=resolver,
        prompts=PromptBuilder(
            enhanced_providers=config.provider.enhanced_providers,
            image_api=config.pipeline.image_api_url,
        ),
        artifacts=LocalFileStore(storage.apps_dir),
        catalog=CatalogStore(storage.apps_dir / storage.catalog_file),
        gate=ValidationGate(
            CheckerCommand.from_config(config.validator),
            enabled=config.validator.enabled,
        ),
        artifact_extension=storage.artifact_extension,
        rollback_failed_edits=config.pipeline.rollback_failed_edits,
    )
    images = ImageService(
        resolver=resolver,
        images=LocalFileStore(storage.images_dir),
        images_base_url=storage.images_base_url,
    )
    return AppForgeServices(config=config, resolver=resolver, generation=generation, images=images)


__all__ = ["AppForgeServices", "GenerationService", "ImageService", "build_services"]
