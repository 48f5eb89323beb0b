"""Core infrastructure components for AppForge."""

from .config import Config, get_config
from .exceptions import (
    AppForgeError,
    BadRequestError,
    FileSystemError,
    NotFoundError,
    ParseError,
    ProviderCallError,
    ProviderConfigurationError,
    ProviderStartupError,
    ValidationError,
)
from .logging import get_logger, request_context, setup_logging
from .types import ServiceResult

__all__ = [
    "Config",
    "get_config",
    "AppForgeError",
    "BadRequestError",
    "FileSystemError",
    "NotFoundError",
    "ParseError",
    "ProviderCallError",
    "ProviderConfigurationError",
    "ProviderStartupError",
    "ValidationError",
    "get_logger",
    "request_context",
    "setup_logging",
    "ServiceResult",
]
