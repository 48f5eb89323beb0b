"""
Image Service.

Generates and edits images with an image-capable provider and returns them
either inline as base64 or as files saved under the served image directory.
"""

from __future__ import annotations

import base64
import binascii
import re
import time

from ...core.exceptions import BadRequestError, ProviderConfigurationError
from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...models.generation import SUPPORTED_ASPECT_RATIOS, GeneratedImage, ImageFormat, ImageResult
from ...providers.base import ImageCapable
from ...providers.registry import ProviderResolver
from ...storage import FileStore
from ..base import run_operation

logger = get_logger(__name__)

_DATA_URI = re.compile(r"\Adata:(?P<mime>[\w/+.-]+);base64,(?P<data>.*)\Z", re.DOTALL)


def _parse_format(value: str) -> ImageFormat:
    try:
        return ImageFormat(value.lower())
    except ValueError:
        allowed = ", ".join(f.value for f in ImageFormat)
        raise BadRequestError(
            message=f"Unsupported return format '{value}'. Use one of: {allowed}",
            field_name="returnFormat",
        ) from None


def _decode_input_image(encoded: str) -> tuple[bytes, str]:
    """Decode a base64 image, accepting a ``data:`` URI prefix."""
    mime_type = "image/png"
    if match := _DATA_URI.match(encoded.strip()):
        mime_type = match.group("mime")
        encoded = match.group("data")
    try:
        return base64.b64decode(encoded, validate=True), mime_type
    except (binascii.Error, ValueError) as e:
        raise BadRequestError(message="inputImage is not valid base64", field_name="inputImage", cause=e) from e


class ImageService:
    """Service for the image generation and image edit operations."""

    def __init__(
        self,
        resolver: ProviderResolver,
        images: FileStore,
        images_base_url: str,
        provider_name: str = "gemini",
    ) -> None:
        """Initialize the image service.

        Args:
            resolver: Provider resolver
            images: Store backing the publicly served image directory
            images_base_url: URL prefix under which ``images`` is served
            provider_name: Image-capable provider to use
        """
        self.resolver = resolver
        self.images = images
        self.images_base_url = images_base_url.rstrip("/")
        self.provider_name = provider_name

    def _image_provider(self) -> ImageCapable:
        provider = self.resolver.resolve(self.provider_name)
        if not isinstance(provider, ImageCapable):
            raise ProviderConfigurationError(
                message=f"Provider {provider.get_name()} cannot generate images",
                provider_name=provider.get_name(),
            )
        return provider

    async def generate_image(
        self,
        prompt: str,
        aspect_ratio: str = "16:9",
        return_format: str = "url",
    ) -> ServiceResult[ImageResult]:
        """Generate an image from a text prompt.

        Args:
            prompt: Image description
            aspect_ratio: One of ``SUPPORTED_ASPECT_RATIOS``
            return_format: ``base64`` or ``url``

        Returns:
            ServiceResult containing the image or its public URL.
        """

        async def handler() -> ServiceResult[ImageResult]:
            if not prompt or not prompt.strip():
                raise BadRequestError(message="Prompt is required", field_name="prompt")
            if aspect_ratio not in SUPPORTED_ASPECT_RATIOS:
                raise BadRequestError(
                    message=f"Unsupported aspect ratio '{aspect_ratio}'",
                    field_name="aspectRatio",
                )
            fmt = _parse_format(return_format)

            image = await self._image_provider().generate_image(prompt.strip(), aspect_ratio=aspect_ratio)
            return ServiceResult.ok(await self._deliver(image, fmt, prefix="gemini"))

        return await run_operation("generate_image", handler, aspect_ratio=aspect_ratio)

    async def edit_image(
        self,
        prompt: str,
        input_image: str,
        return_format: str = "url",
    ) -> ServiceResult[ImageResult]:
        """Edit a base64-encoded input image according to a prompt.

        Args:
            prompt: Edit instructions
            input_image: Base64 image data, optionally as a ``data:`` URI
            return_format: ``base64`` or ``url``

        Returns:
            ServiceResult containing the edited image or its public URL.
        """

        async def handler() -> ServiceResult[ImageResult]:
            if not prompt or not prompt.strip() or not input_image:
                raise BadRequestError(message="Both prompt and inputImage are required")
            fmt = _parse_format(return_format)
            data, mime_type = _decode_input_image(input_image)

            image = await self._image_provider().edit_image(prompt.strip(), data, mime_type=mime_type)
            return ServiceResult.ok(await self._deliver(image, fmt, prefix="gemini-edited"))

        return await run_operation("edit_image", handler)

    async def _deliver(self, image: GeneratedImage, fmt: ImageFormat, prefix: str) -> ImageResult:
        if fmt is ImageFormat.BASE64:
            return ImageResult(
                format=fmt,
                mime_type=image.mime_type,
                image=base64.b64encode(image.data).decode("ascii"),
            )

        filename = await self._store_unique(prefix, image.extension, image.data)
        logger.info("Image saved", filename=filename, size=len(image.data))
        return ImageResult(
            format=fmt,
            mime_type=image.mime_type,
            image_url=f"{self.images_base_url}/{filename}",
            filename=filename,
        )

    async def _store_unique(self, prefix: str, extension: str, data: bytes) -> str:
        """Save under ``<prefix>-<ms>.<ext>``, adding ``-N`` until a free name is claimed."""
        stamp = time.time_ns() // 1_000_000
        filename = f"{prefix}-{stamp}.{extension}"
        counter = 1
        while not await self.images.store_new_bytes(filename, data):
            filename = f"{prefix}-{stamp}-{counter}.{extension}"
            counter += 1
        return filename
