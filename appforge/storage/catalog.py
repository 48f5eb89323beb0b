"""
Catalog store.

Persists the ordered list of generated-app records as a single JSON file.
Every mutation rewrites the whole file; mutations made through one store
instance are serialized with an asyncio lock so concurrent requests on the
same event loop cannot drop each other's updates. Writers in other processes
are not coordinated.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import aiofiles
import aiofiles.os
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import FileSystemError, NotFoundError
from ..core.logging import get_logger
from ..models.catalog import CatalogEntry

logger = get_logger(__name__)

_ENTRIES = TypeAdapter(list[CatalogEntry])


class CatalogStore:
    """JSON-file catalog of ``CatalogEntry`` records."""

    def __init__(self, path: Path) -> None:
        """Initialize the catalog store.

        Args:
            path: Catalog file location; its directory is created on first write
        """
        self.path = path.resolve()
        self._lock = asyncio.Lock()

    async def list(self) -> list[CatalogEntry]:
        """Return every entry in stored order (empty if no catalog file yet)."""
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            return []
        except OSError as e:
            raise FileSystemError(
                message=f"Failed to read catalog: {e}", path=str(self.path), operation="read", cause=e
            ) from e

        try:
            return _ENTRIES.validate_json(content)
        except PydanticValidationError as e:
            raise FileSystemError(
                message="Catalog file is not a valid list of entries",
                path=str(self.path),
                operation="parse",
                cause=e,
            ) from e

    async def find_by_id(self, app_id: str) -> CatalogEntry | None:
        for entry in await self.list():
            if entry.id == app_id:
                return entry
        return None

    async def append(self, entry: CatalogEntry) -> CatalogEntry:
        async with self._lock:
            entries = await self.list()
            entries.append(entry)
            await self._write(entries)

        logger.info("Catalog entry added", app_id=entry.id, file_name=entry.file_name, total=len(entries))
        return entry

    async def remove(self, app_id: str) -> CatalogEntry:
        """Remove an entry and rewrite the catalog.

        Raises:
            NotFoundError: If no entry has ``app_id``.
        """
        async with self._lock:
            entries = await self.list()
            removed = next((entry for entry in entries if entry.id == app_id), None)
            if removed is None:
                raise NotFoundError(message="App not found", resource="catalog_entry", key=app_id)
            remaining = [entry for entry in entries if entry.id != app_id]
            await self._write(remaining)

        logger.info("Catalog entry removed", app_id=app_id, total=len(remaining))
        return removed

    async def _write(self, entries: list[CatalogEntry]) -> None:
        """Write the full list through a temporary file so readers never see a partial catalog."""
        payload = json.dumps(
            [entry.model_dump(mode="json", by_alias=True) for entry in entries],
            indent=2,
        )
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            raise FileSystemError(
                message=f"Failed to write catalog: {e}", path=str(self.path), operation="write", cause=e
            ) from e
