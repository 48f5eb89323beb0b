"""
Catalog models.

Records describing generated apps as they are persisted in the catalog file,
plus the result payloads returned by the create and edit operations.
"""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field


def new_app_id() -> str:
    """Create a catalog id: millisecond timestamp plus a short random suffix."""
    return f"{time.time_ns() // 1_000_000}-{uuid.uuid4().hex[:6]}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CatalogEntry(BaseModel):
    """Metadata for one generated app.

    Serialized with camelCase keys (``componentName``, ``fileName``,
    ``createdAt``, ``aiProvider``) so existing catalog files stay readable.
    """

    id: str = Field(default_factory=new_app_id, description="Unique catalog id")
    name: str = Field(description="Human-readable title")
    component_name: str = Field(alias="componentName", description="Exported component identifier")
    file_name: str = Field(alias="fileName", description="Artifact file name")
    description: str = Field(default="", description="Short human summary")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    ai_provider: str = Field(alias="aiProvider", description="Provider that generated the app")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class AppNaming(BaseModel):
    """Name and short description synthesized for a new app."""

    name: str
    short_description: str = Field(alias="shortDescription")

    model_config = {"populate_by_name": True}


class CreatedApp(BaseModel):
    """Result of a successful create."""

    id: str
    name: str
    component_name: str = Field(alias="componentName")
    file_name: str = Field(alias="fileName")
    description: str
    ai_provider: str = Field(alias="aiProvider")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> CreatedApp:
        return cls(
            id=entry.id,
            name=entry.name,
            component_name=entry.component_name,
            file_name=entry.file_name,
            description=entry.description,
            ai_provider=entry.ai_provider,
        )


class EditedApp(BaseModel):
    """Result of an edit, successful or not."""

    id: str
    file_name: str = Field(alias="fileName")
    ai_provider: str = Field(alias="aiProvider")
    rolled_back: bool = Field(default=False, alias="rolledBack")

    model_config = {"populate_by_name": True}
