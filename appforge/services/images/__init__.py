"""Image generation service."""

from .service import ImageService

__all__ = ["ImageService"]
