"""Data models for AppForge."""

from .catalog import AppNaming, CatalogEntry, CreatedApp, EditedApp, new_app_id
from .generation import (
    SUPPORTED_ASPECT_RATIOS,
    GeneratedImage,
    GenerationContext,
    GenerationMode,
    ImageFormat,
    ImageResult,
    ValidationResult,
)

__all__ = [
    "AppNaming",
    "CatalogEntry",
    "CreatedApp",
    "EditedApp",
    "new_app_id",
    "SUPPORTED_ASPECT_RATIOS",
    "GeneratedImage",
    "GenerationContext",
    "GenerationMode",
    "ImageFormat",
    "ImageResult",
    "ValidationResult",
]
