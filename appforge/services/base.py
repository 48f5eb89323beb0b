"""
Service boundary helpers.

Public service operations never raise: pipeline errors become failed
``ServiceResult`` values carrying the error type and diagnostic details.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from ..core.exceptions import AppForgeError
from ..core.logging import get_logger, request_context
from ..core.types import ServiceResult

logger = get_logger(__name__)

T = TypeVar("T")


async def run_operation(
    operation: str,
    handler: Callable[[], Awaitable[ServiceResult[T]]],
    **context: Any,
) -> ServiceResult[T]:
    """Run one public operation inside a request logging context.

    Args:
        operation: Operation name bound to every log entry
        handler: Coroutine factory producing the successful result
        **context: Extra fields bound for logging

    Returns:
        The handler's result, or a failed result describing the error.
    """
    start_time = time.perf_counter()
    with request_context(operation, **context):
        try:
            result = await handler()
        except AppForgeError as e:
            logger.error(
                f"{operation} failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            result = ServiceResult.from_error(e, **context)
        except Exception as e:
            logger.exception(f"{operation} failed unexpectedly")
            result = ServiceResult.fail(str(e), error_type="InternalError", **context)

        result.duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{operation} completed",
            success=result.success,
            duration_ms=round(result.duration_ms, 1),
        )
        return result
