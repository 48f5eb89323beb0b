"""
Ephemeral generation models.

None of these are persisted; they carry state through a single request.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class GenerationMode(str, Enum):
    """Which orchestrator flow a context belongs to."""

    CREATE = "create"
    EDIT = "edit"


class GenerationContext(BaseModel):
    """Per-request generation state."""

    mode: GenerationMode
    provider_name: str
    request_text: str = Field(description="App description (create) or edit instructions (edit)")
    component_name: str
    current_source: str | None = Field(default=None, description="Prior artifact source, edit path only")


class ValidationResult(BaseModel):
    """Outcome of running the external checker against one file."""

    passed: bool
    diagnostics: str = ""
    exit_code: int | None = None
    skipped: bool = Field(default=False, description="Checker could not be started")
    warning: str | None = None


class ImageFormat(str, Enum):
    """How a generated image is returned to the caller."""

    BASE64 = "base64"
    URL = "url"


SUPPORTED_ASPECT_RATIOS = ("1:1", "16:9", "9:16", "2:3", "3:2", "3:4", "4:3", "4:5", "5:4", "21:9")


class GeneratedImage(BaseModel):
    """Raw image returned by an image-capable provider."""

    data: bytes
    mime_type: str = "image/png"

    @property
    def extension(self) -> str:
        return "png" if "png" in self.mime_type else "jpg"


class ImageResult(BaseModel):
    """Image sub-operation result."""

    format: ImageFormat
    mime_type: str
    image: str | None = Field(default=None, description="Base64 data when format is base64")
    image_url: str | None = Field(default=None, description="Public URL when format is url")
    filename: str | None = None
