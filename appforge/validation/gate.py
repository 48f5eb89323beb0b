"""
Validation gate.

Runs an external static checker (``tsc --noEmit`` by default) against a
written artifact and classifies the outcome. The checker is best-effort: if
its executable cannot be started the artifact is accepted with a warning.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field

from ..core.logging import get_logger
from ..core.process import CommandResult, run_command
from ..models.generation import ValidationResult

if TYPE_CHECKING:
    from ..core.config import ValidatorConfig

logger = get_logger(__name__)

SKIPPED_WARNING = "Code validation could not be performed"


class CheckerCommand(BaseModel):
    """How to invoke the checker and read its verdict."""

    command: list[str] = Field(
        default_factory=lambda: ["npx", "tsc", "--noEmit", "--jsx", "preserve"],
        min_length=1,
    )
    timeout_seconds: float | None = Field(default=None, gt=0)
    diagnostics_stream: Literal["stderr", "stdout", "both"] = "stderr"
    cwd: Path | None = None

    @classmethod
    def from_config(cls, config: ValidatorConfig) -> CheckerCommand:
        return cls(
            command=config.command,
            timeout_seconds=config.timeout_seconds,
            diagnostics_stream=config.diagnostics_stream,
            cwd=config.cwd,
        )

    def argv(self, path: Path) -> list[str]:
        return [*self.command, str(path)]

    def diagnostics(self, result: CommandResult) -> str:
        if self.diagnostics_stream == "stdout":
            return result.stdout
        if self.diagnostics_stream == "both":
            return "\n".join(s for s in (result.stdout, result.stderr) if s)
        return result.stderr


class ValidationGate:
    """Checks generated sources with an external tool."""

    def __init__(self, checker: CheckerCommand | None = None, enabled: bool = True) -> None:
        """Initialize the gate.

        Args:
            checker: Checker invocation; defaults to ``npx tsc``
            enabled: When False every artifact passes without running anything
        """
        self.checker = checker or CheckerCommand()
        self.enabled = enabled

    async def validate(self, path: Path) -> ValidationResult:
        """Run the checker against ``path``.

        Exit code 0 passes. A non-zero exit passes too when the diagnostic
        stream is empty; otherwise the diagnostics are returned verbatim.

        Args:
            path: File to check

        Returns:
            ValidationResult describing the verdict.
        """
        if not self.enabled:
            return ValidationResult(passed=True, skipped=True, warning="Code validation is disabled")

        try:
            result = await run_command(
                self.checker.argv(path),
                cwd=self.checker.cwd,
                timeout=self.checker.timeout_seconds,
            )
        except TimeoutError as e:
            # TimeoutError is an OSError subclass; it must be handled first.
            logger.error("Checker timed out", file=path.name, timeout=self.checker.timeout_seconds)
            return ValidationResult(passed=False, diagnostics=str(e))
        except OSError as e:
            logger.warning("Checker could not be started, skipping validation", error=str(e))
            return ValidationResult(passed=True, skipped=True, warning=SKIPPED_WARNING)

        diagnostics = self.checker.diagnostics(result)
        if result.returncode != 0 and diagnostics.strip():
            logger.warning(
                "Validation failed",
                file=path.name,
                exit_code=result.returncode,
                diagnostics=diagnostics[:500],
            )
            return ValidationResult(passed=False, diagnostics=diagnostics, exit_code=result.returncode)

        logger.info("Validation passed", file=path.name, exit_code=result.returncode)
        return ValidationResult(passed=True, diagnostics=diagnostics, exit_code=result.returncode)
