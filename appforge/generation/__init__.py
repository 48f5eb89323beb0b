"""Provider output handling: sanitization and naming."""

from .naming import FALLBACK_COMPONENT_NAME, derive_component_name, parse_naming, resolve_naming
from .sanitizer import sanitize, strip_fences, terminate_template_returns, wrap_in_fence

__all__ = [
    "FALLBACK_COMPONENT_NAME",
    "derive_component_name",
    "parse_naming",
    "resolve_naming",
    "sanitize",
    "strip_fences",
    "terminate_template_returns",
    "wrap_in_fence",
]
