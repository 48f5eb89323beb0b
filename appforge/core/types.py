"""
Core type definitions for AppForge.

Provides the result wrapper returned by every public service operation so that
callers (CLI, HTTP layer) can report success or failure uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .exceptions import AppForgeError

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """Result wrapper for service operations.

    Provides a consistent return type that includes success/failure status,
    the result data, and any errors or warnings.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_type: str | None = None
    details: str | None = None
    warnings: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0

    @classmethod
    def ok(cls, data: T, **metadata: Any) -> ServiceResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, error_type: str | None = None, **metadata: Any) -> ServiceResult[T]:
        """Create a failed result."""
        return cls(success=False, error=error, error_type=error_type, metadata=metadata)

    @classmethod
    def with_warnings(cls, data: T, warnings: list[str], **metadata: Any) -> ServiceResult[T]:
        """Create a successful result with warnings."""
        return cls(success=True, data=data, warnings=warnings, metadata=metadata)

    @classmethod
    def from_error(cls, error: AppForgeError, data: T | None = None, **metadata: Any) -> ServiceResult[T]:
        """Create a failed result from a pipeline exception.

        The exception's message becomes ``error``; diagnostic text such as
        checker output is carried separately in ``details``.
        """
        return cls(
            success=False,
            data=data,
            error=error.message,
            error_type=type(error).__name__,
            details=error.details,
            metadata=metadata,
        )
