"""
Local filesystem file store.

Backs both the artifact directory (generated components) and the served image
directory. Directories are created lazily on first write.
"""

from __future__ import annotations

from pathlib import Path

import aiofiles
import aiofiles.os

from ..core.exceptions import FileSystemError, NotFoundError
from ..core.logging import get_logger
from .interface import FileStore

logger = get_logger(__name__)


class LocalFileStore(FileStore):
    """Flat directory of files keyed by file name."""

    def __init__(self, base_path: Path) -> None:
        """Initialize local storage.

        Args:
            base_path: Directory holding every stored file
        """
        self.base_path = base_path.resolve()

    async def _ensure_base(self) -> None:
        try:
            await aiofiles.os.makedirs(self.base_path, exist_ok=True)
        except OSError as e:
            raise FileSystemError(
                message=f"Cannot create directory: {e}",
                path=str(self.base_path),
                operation="mkdir",
                cause=e,
            ) from e

    def path_for(self, key: str) -> Path:
        """Get full filesystem path for a key.

        Normalizes the key to prevent path traversal and ensures the
        resulting path is within the base directory.

        Args:
            key: The storage key to convert to a filesystem path.

        Returns:
            The resolved absolute path within the base directory.
        """
        clean_key = key.lstrip("/\\").replace("..", "").replace(":", "")
        full_path = (self.base_path / clean_key).resolve()

        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            clean_key = clean_key.replace("/", "_").replace("\\", "_")
            full_path = self.base_path / clean_key

        return full_path

    async def store_text(self, key: str, content: str) -> str:
        full_path = self.path_for(key)
        await self._ensure_base()
        try:
            async with aiofiles.open(full_path, "w", encoding="utf-8") as f:
                await f.write(content)
        except OSError as e:
            raise FileSystemError(
                message=f"Failed to write file: {e}", path=str(full_path), operation="write", cause=e
            ) from e

        logger.debug("Stored text", key=key, chars=len(content))
        return key

    async def store_bytes(self, key: str, data: bytes) -> str:
        full_path = self.path_for(key)
        await self._ensure_base()
        try:
            async with aiofiles.open(full_path, "wb") as f:
                await f.write(data)
        except OSError as e:
            raise FileSystemError(
                message=f"Failed to write file: {e}", path=str(full_path), operation="write", cause=e
            ) from e

        logger.debug("Stored bytes", key=key, size_bytes=len(data), sha256=self.compute_hash(data)[:16])
        return key

    async def store_new_bytes(self, key: str, data: bytes) -> bool:
        full_path = self.path_for(key)
        await self._ensure_base()
        try:
            # "x" mode fails if the file exists (O_EXCL).
            async with aiofiles.open(full_path, "xb") as f:
                await f.write(data)
        except FileExistsError:
            return False
        except OSError as e:
            raise FileSystemError(
                message=f"Failed to write file: {e}", path=str(full_path), operation="write", cause=e
            ) from e

        logger.debug("Stored new bytes", key=key, size_bytes=len(data), sha256=self.compute_hash(data)[:16])
        return True

    async def load_text(self, key: str) -> str:
        """Load text content from filesystem.

        Raises:
            NotFoundError: If the key does not exist.
            FileSystemError: If the file exists but cannot be read.
        """
        full_path = self.path_for(key)
        try:
            async with aiofiles.open(full_path, "r", encoding="utf-8") as f:
                return await f.read()
        except FileNotFoundError as e:
            raise NotFoundError(message=f"File not found: {key}", resource="file", key=key, cause=e) from e
        except OSError as e:
            raise FileSystemError(
                message=f"Failed to read file: {e}", path=str(full_path), operation="read", cause=e
            ) from e

    async def delete(self, key: str) -> bool:
        full_path = self.path_for(key)
        try:
            await aiofiles.os.remove(full_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FileSystemError(
                message=f"Failed to delete file: {e}", path=str(full_path), operation="delete", cause=e
            ) from e
        return True

    async def replace(self, source_key: str, target_key: str) -> None:
        source = self.path_for(source_key)
        target = self.path_for(target_key)
        try:
            await aiofiles.os.replace(source, target)
        except OSError as e:
            raise FileSystemError(
                message=f"Failed to replace file: {e}", path=str(target), operation="replace", cause=e
            ) from e
