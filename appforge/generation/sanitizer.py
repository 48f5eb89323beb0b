"""
Output sanitization.

Normalizes raw provider output into text that can be written directly as a
component source file. Sanitization never rejects output; malformed code is
left for the validation gate to catch.
"""

from __future__ import annotations

import re

FENCE = "```"

_OPENING_FENCE = re.compile(r"\A```[^\n]*(?:\n|\Z)")
_CLOSING_FENCE = re.compile(r"\n?```\s*\Z")
# `return `...`` without a terminator trips the JSX parser; (?!\s*;) keeps the fix idempotent.
_UNTERMINATED_TEMPLATE_RETURN = re.compile(r"return `([^`]+)`(?!\s*;)")


def strip_fences(text: str) -> str:
    """Remove a leading fence line (with optional language tag) and a trailing fence."""
    stripped = text.strip()
    if not stripped.startswith(FENCE):
        return stripped
    stripped = _OPENING_FENCE.sub("", stripped, count=1)
    stripped = _CLOSING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def terminate_template_returns(source: str) -> str:
    """Append ``;`` after every ``return`` of a template literal lacking one."""
    return _UNTERMINATED_TEMPLATE_RETURN.sub(r"return `\1`;", source)


def sanitize(raw: str) -> str:
    """Sanitize raw provider output.

    Args:
        raw: Text exactly as returned by the provider

    Returns:
        Trimmed, fence-free source with template-literal returns terminated.
    """
    return terminate_template_returns(strip_fences(raw))


def wrap_in_fence(text: str, language: str = "tsx") -> str:
    """Wrap text the way chat models commonly do (inverse of ``strip_fences``)."""
    return f"{FENCE}{language}\n{text}\n{FENCE}"
