"""
Structured logging configuration for AppForge.

Uses structlog for structured, context-rich logging that supports both human-readable
console output and JSON format for production/CI environments.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config

NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "google_genai")


def setup_logging(config: Config | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        config: Optional configuration. If None, uses INFO level.
    """
    log_level = config.log_level if config else "INFO"
    level = getattr(logging, log_level, logging.INFO)

    console = Console(stderr=True)
    handler = RichHandler(
        console=console,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=log_level == "DEBUG",
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    # The provider SDKs log every HTTP request at INFO.
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if sys.stderr.isatty():
        processors = shared_processors + [
            # RichHandler does its own styling; ANSI codes would show up raw.
            structlog.dev.ConsoleRenderer(colors=False),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        # Routed through stdlib logging so output always reaches the current stderr.
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured bound logger
    """
    return structlog.get_logger(name)


@contextmanager
def request_context(operation: str, **kwargs: object) -> Iterator[str]:
    """Bind a fresh request id and operation name for the duration of a block.

    Previously bound variables are restored on exit, so nested service calls
    (e.g. a CLI command that triggers several operations) keep their own ids.

    Args:
        operation: Name of the public operation being served
        **kwargs: Additional context key-value pairs

    Yields:
        The generated request id
    """
    request_id = uuid.uuid4().hex[:12]
    tokens = structlog.contextvars.bind_contextvars(
        request_id=request_id, operation=operation, **kwargs
    )
    try:
        yield request_id
    finally:
        structlog.contextvars.reset_contextvars(**tokens)
