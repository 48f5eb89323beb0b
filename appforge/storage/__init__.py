"""Storage abstraction for AppForge."""

from .catalog import CatalogStore
from .interface import FileStore
from .local import LocalFileStore

__all__ = ["CatalogStore", "FileStore", "LocalFileStore"]
