"""
Custom exception hierarchy for AppForge.

All exceptions inherit from AppForgeError to enable consistent error handling
across the pipeline. Each exception type includes context for debugging and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AppForgeError(Exception):
    """Base exception for all AppForge errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"

    @property
    def details(self) -> str | None:
        """Extra diagnostic text surfaced to callers alongside the message."""
        return None


@dataclass
class ProviderConfigurationError(AppForgeError):
    """Raised for an unknown provider name or a missing/invalid credential."""

    provider_name: str = ""

    def __str__(self) -> str:
        return f"[provider: {self.provider_name or 'unknown'}] {self.message}"


@dataclass
class ProviderCallError(AppForgeError):
    """Raised when a provider fails to produce output."""

    provider_name: str = ""
    exit_code: int | None = None

    def __str__(self) -> str:
        code = f" (exit code {self.exit_code})" if self.exit_code is not None else ""
        return f"[provider: {self.provider_name}]{code} {self.message}"


@dataclass
class ProviderStartupError(ProviderCallError):
    """Raised when a local agent executable cannot be launched."""


@dataclass
class ParseError(AppForgeError):
    """Raised when a structured provider payload cannot be parsed."""

    raw_output: str = ""


@dataclass
class ValidationError(AppForgeError):
    """Raised when a generated artifact fails static checking."""

    diagnostics: str = ""
    file_name: str = ""

    def __str__(self) -> str:
        target = f" '{self.file_name}'" if self.file_name else ""
        return f"Validation failed for{target}: {self.message}"

    @property
    def details(self) -> str | None:
        return self.diagnostics or None


@dataclass
class NotFoundError(AppForgeError):
    """Raised for an unknown catalog id or a missing artifact file."""

    resource: str = ""
    key: str = ""


@dataclass
class FileSystemError(AppForgeError):
    """Raised when reading, writing or deleting a file fails."""

    path: str = ""
    operation: str = ""

    def __str__(self) -> str:
        return f"[{self.operation} {self.path}] {self.message}"


@dataclass
class BadRequestError(AppForgeError):
    """Raised when a request is missing required fields or has invalid values."""

    field_name: str | None = None

    def __str__(self) -> str:
        if self.field_name:
            return f"Invalid request field '{self.field_name}': {self.message}"
        return f"Invalid request: {self.message}"
