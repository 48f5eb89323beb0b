"""
Configuration management for AppForge.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults for providers, validation, and storage.
"""

from __future__ import annotations

import os
import shlex
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

PLACEHOLDER_KEYS = {"your_gemini_api_key_here", "your_openai_api_key_here", "your_anthropic_api_key_here"}


def _secret_from_env(name: str) -> SecretStr | None:
    """Read a credential from the environment, treating placeholders as unset."""
    value = os.environ.get(name, "").strip()
    if not value or value in PLACEHOLDER_KEYS:
        return None
    return SecretStr(value)


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class ProviderConfig(BaseModel):
    """Text/image provider configuration."""

    deployment: Literal["local", "hosted"] = Field(
        default="local",
        description="'hosted' pins every request to Gemini and requires its key at startup",
    )
    default_provider: str = Field(default="claude", description="Provider used when none is given")
    enhanced_providers: list[str] = Field(
        default_factory=lambda: ["gemini"],
        description="Providers that receive the structural design-system prompt block",
    )

    # Gemini
    gemini_model: str = Field(default="gemini-3-pro-preview", description="Gemini text model")
    gemini_image_model: str = Field(default="gemini-2.5-flash-image", description="Gemini image model")
    thinking_level: Literal["low", "high"] | None = Field(
        default="high", description="Reasoning effort for models that support it"
    )

    # OpenAI / Anthropic
    openai_model: str = Field(default="gpt-4o", description="OpenAI chat model")
    anthropic_model: str = Field(default="claude-sonnet-4-5", description="Anthropic messages model")

    # Shared decoding parameters
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_output_tokens: int = Field(default=8192, ge=256, description="Max output tokens")

    # Local agent
    local_agent_command: list[str] = Field(
        default_factory=lambda: ["claude", "--print"],
        min_length=1,
        description="Command line for the locally installed agent",
    )
    local_agent_cwd: Path | None = Field(default=None, description="Working directory for the agent")


class ValidatorConfig(BaseModel):
    """External checker configuration."""

    enabled: bool = Field(default=True, description="Run the checker after every write")
    command: list[str] = Field(
        default_factory=lambda: ["npx", "tsc", "--noEmit", "--jsx", "preserve"],
        min_length=1,
        description="Checker argv; the artifact path is appended",
    )
    timeout_seconds: float | None = Field(default=None, gt=0, description="Kill the checker after this long")
    diagnostics_stream: Literal["stderr", "stdout", "both"] = Field(
        default="stderr", description="Stream(s) treated as diagnostic output"
    )
    cwd: Path | None = Field(default=None, description="Working directory for the checker")


class StorageConfig(BaseModel):
    """Storage configuration for artifacts, catalog and images."""

    apps_dir: Path = Field(default=Path("./src/generated-apps"), description="Generated component directory")
    catalog_file: str = Field(default="apps.json", description="Catalog file name inside apps_dir")
    artifact_extension: str = Field(default=".tsx", description="Extension for generated components")
    images_dir: Path = Field(default=Path("./public/generated-images"), description="Generated image directory")
    images_base_url: str = Field(
        default="http://localhost:3001/generated-images",
        description="Public URL prefix under which images_dir is served",
    )


class PipelineConfig(BaseModel):
    """Generation pipeline behavior."""

    rollback_failed_edits: bool = Field(
        default=False,
        description="Validate edits in a staging file and keep the previous source on failure",
    )
    image_api_url: str = Field(
        default="http://localhost:3001/api/gemini",
        description="Image endpoint base URL that generated apps call back into",
    )


class Config(BaseModel):
    """Root configuration for AppForge."""

    project_name: str = Field(default="AppForge", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    validator: ValidatorConfig = Field(default_factory=ValidatorConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)

    # API Keys (loaded from environment)
    gemini_api_key: SecretStr | None = Field(default_factory=lambda: _secret_from_env("GEMINI_API_KEY"))
    openai_api_key: SecretStr | None = Field(default_factory=lambda: _secret_from_env("OPENAI_API_KEY"))
    anthropic_api_key: SecretStr | None = Field(default_factory=lambda: _secret_from_env("ANTHROPIC_API_KEY"))

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables.

        Values go through the model constructors, so out-of-range settings
        raise ``pydantic.ValidationError`` instead of being stored as-is.
        """
        provider: dict[str, Any] = {
            "deployment": os.environ.get("APPFORGE_DEPLOYMENT", "local"),
            "default_provider": os.environ.get("APPFORGE_DEFAULT_PROVIDER", "claude"),
            "gemini_model": os.environ.get("APPFORGE_GEMINI_MODEL", "gemini-3-pro-preview"),
            "gemini_image_model": os.environ.get("APPFORGE_GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"),
            "openai_model": os.environ.get("APPFORGE_OPENAI_MODEL", "gpt-4o"),
            "anthropic_model": os.environ.get("APPFORGE_ANTHROPIC_MODEL", "claude-sonnet-4-5"),
        }
        if agent_command := os.environ.get("APPFORGE_LOCAL_AGENT_COMMAND"):
            provider["local_agent_command"] = shlex.split(agent_command)

        validator: dict[str, Any] = {"enabled": _flag("APPFORGE_VALIDATION_ENABLED", "true")}
        if checker_command := os.environ.get("APPFORGE_CHECKER_COMMAND"):
            validator["command"] = shlex.split(checker_command)
        if checker_timeout := os.environ.get("APPFORGE_CHECKER_TIMEOUT"):
            validator["timeout_seconds"] = checker_timeout

        return cls(
            log_level=os.environ.get("APPFORGE_LOG_LEVEL", "INFO"),  # type: ignore
            provider=ProviderConfig(**provider),
            validator=ValidatorConfig(**validator),
            storage=StorageConfig(
                apps_dir=Path(os.environ.get("APPFORGE_APPS_DIR", "./src/generated-apps")),
                images_dir=Path(os.environ.get("APPFORGE_IMAGES_DIR", "./public/generated-images")),
                images_base_url=os.environ.get(
                    "APPFORGE_IMAGES_BASE_URL", "http://localhost:3001/generated-images"
                ),
            ),
            pipeline=PipelineConfig(
                rollback_failed_edits=_flag("APPFORGE_ROLLBACK_FAILED_EDITS", "false"),
                image_api_url=os.environ.get("APPFORGE_IMAGE_API_URL", "http://localhost:3001/api/gemini"),
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
