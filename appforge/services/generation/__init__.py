"""App generation lifecycle service."""

from .service import DEFAULT_PROBE_PROMPT, GenerationService

__all__ = ["DEFAULT_PROBE_PROMPT", "GenerationService"]
