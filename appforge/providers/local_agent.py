"""
Local agent provider.

Runs a locally installed command-line coding agent (``claude --print`` by
default) and returns whatever it prints.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ..core.exceptions import ProviderCallError, ProviderConfigurationError, ProviderStartupError
from ..core.logging import get_logger
from ..core.process import run_command
from .base import TextProvider
from .registry import ProviderRegistry

if TYPE_CHECKING:
    from ..core.config import Config

logger = get_logger(__name__)


@ProviderRegistry.register
class LocalAgentProvider(TextProvider):
    """Provider that pipes the prompt through a local CLI agent."""

    NAME = "claude"

    def __init__(self, command: list[str], cwd: Path | None = None) -> None:
        """Initialize the provider.

        Args:
            command: Agent argv; the prompt goes to stdin, never argv
            cwd: Working directory for the agent process
        """
        if not command:
            raise ProviderConfigurationError(
                message="Local agent command is empty", provider_name=self.NAME
            )
        self.command = command
        self.cwd = cwd

    @classmethod
    def from_config(cls, config: Config) -> LocalAgentProvider:
        return cls(config.provider.local_agent_command, cwd=config.provider.local_agent_cwd)

    async def generate_text(self, prompt: str) -> str:
        try:
            result = await run_command(self.command, input_text=prompt, cwd=self.cwd)
        except OSError as e:
            logger.error("Failed to start local agent", command=self.command[0], error=str(e))
            raise ProviderStartupError(
                message=f"Failed to start {self.command[0]}: {e}",
                provider_name=self.NAME,
                cause=e,
            ) from e

        if result.returncode != 0:
            logger.error("Local agent failed", exit_code=result.returncode, stderr=result.stderr[:500])
            raise ProviderCallError(
                message=result.stderr.strip() or f"{self.command[0]} process failed",
                provider_name=self.NAME,
                exit_code=result.returncode,
            )

        return result.stdout
