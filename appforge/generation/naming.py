"""
App naming.

Parses the provider's name/description payload and derives the component
identifier used for the export and the artifact file name.
"""

from __future__ import annotations

import json
import re
from typing import Any

from ..core.exceptions import ParseError
from ..core.logging import get_logger
from ..models.catalog import AppNaming

logger = get_logger(__name__)

FALLBACK_COMPONENT_NAME = "GeneratedApp"

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9\s]")
_JSON_FENCE_OPEN = re.compile(r"\A```[\w-]*\s*\n?")
_JSON_FENCE_CLOSE = re.compile(r"\n?```\s*\Z")
_EMBEDDED_OBJECT = re.compile(r"\{[\s\S]*\}")


def derive_component_name(name: str) -> str:
    """Derive a bare identifier from a display name.

    Non-alphanumerics are stripped, the rest is split on whitespace and each
    token is title-cased (``"quick calc!"`` -> ``"QuickCalc"``). Names that
    leave nothing usable map to ``GeneratedApp``; a leading digit gets an
    ``App`` prefix.

    Args:
        name: Human-readable app name

    Returns:
        Deterministic identifier valid in TypeScript.
    """
    tokens = _NON_ALPHANUMERIC.sub("", name).split()
    component = "".join(token[0].upper() + token[1:].lower() for token in tokens)
    if not component:
        return FALLBACK_COMPONENT_NAME
    if component[0].isdigit():
        return f"App{component}"
    return component


def _load_json_object(text: str) -> dict[str, Any]:
    cleaned = _JSON_FENCE_CLOSE.sub("", _JSON_FENCE_OPEN.sub("", text.strip()))
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        # Models sometimes wrap the object in a sentence.
        match = _EMBEDDED_OBJECT.search(cleaned)
        if not match:
            raise
        data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _text_field(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_naming(raw_output: str, description: str) -> AppNaming:
    """Parse a naming payload.

    A field missing from an otherwise valid payload falls back to the
    description on its own.

    Raises:
        ParseError: If no JSON object can be read from ``raw_output``.
    """
    try:
        data = _load_json_object(raw_output)
    except ValueError as e:  # json.JSONDecodeError is a ValueError
        raise ParseError(
            message=f"Malformed naming payload: {e}", raw_output=raw_output[:500], cause=e
        ) from e

    return AppNaming(
        name=_text_field(data, "name") or description,
        short_description=_text_field(data, "shortDescription") or description,
    )


def resolve_naming(raw_output: str, description: str) -> tuple[AppNaming, bool]:
    """Parse a naming payload, falling back to the description.

    Returns:
        The naming and whether the fallback was used.
    """
    try:
        return parse_naming(raw_output, description), False
    except ParseError as e:
        logger.warning("Failed to parse name generation, using description", error=e.message)
        return AppNaming(name=description, short_description=description), True
