"""
File store interface.

Defines the abstract interface the pipeline uses for generated artifacts and
images, so the orchestrator never touches the filesystem directly.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from pathlib import Path


class FileStore(ABC):
    """Abstract keyed file store.

    Keys are flat file names (``QuickCalc.tsx``, ``gemini-1700000000000.png``).
    Implementations raise ``NotFoundError`` for missing keys on load and
    ``FileSystemError`` for any other I/O failure.
    """

    @abstractmethod
    async def store_text(self, key: str, content: str) -> str:
        """Store text content, overwriting any previous content.

        Args:
            key: File key.
            content: Text content to store.

        Returns:
            The final storage key.
        """
        ...

    @abstractmethod
    async def store_bytes(self, key: str, data: bytes) -> str:
        """Store raw bytes, overwriting any previous content.

        Args:
            key: File key.
            data: Raw bytes to store.

        Returns:
            The final storage key.
        """
        ...

    @abstractmethod
    async def store_new_bytes(self, key: str, data: bytes) -> bool:
        """Store raw bytes only if ``key`` is not taken yet.

        Creating the key is atomic, so concurrent writers never share a key.

        Returns:
            True if the bytes were stored, False if the key already existed.
        """
        ...

    @abstractmethod
    async def load_text(self, key: str) -> str:
        """Load text content.

        Args:
            key: File key to load.

        Returns:
            The stored text.
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key.

        Returns:
            True if the key was deleted, False if it did not exist.
        """
        ...

    @abstractmethod
    async def replace(self, source_key: str, target_key: str) -> None:
        """Atomically move ``source_key`` over ``target_key``."""
        ...

    @abstractmethod
    def path_for(self, key: str) -> Path:
        """Filesystem path for a key, whether or not it exists yet.

        External tools (the checker) need a real path to operate on.
        """
        ...

    @staticmethod
    def compute_hash(data: bytes) -> str:
        """Compute SHA-256 hash of data."""
        return hashlib.sha256(data).hexdigest()
