"""Artifact validation through an external checker."""

from .gate import SKIPPED_WARNING, CheckerCommand, ValidationGate

__all__ = ["SKIPPED_WARNING", "CheckerCommand", "ValidationGate"]
