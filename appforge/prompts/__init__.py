"""Prompt construction for AppForge."""

from .builder import PromptBuilder
from .enhancement import DESIGN_SYSTEM_BLOCK, enhance_for_provider
from .templates import PromptTemplate

__all__ = ["PromptBuilder", "DESIGN_SYSTEM_BLOCK", "enhance_for_provider", "PromptTemplate"]
