"""Test configuration for AppForge."""

import sys
import tempfile
import textwrap
from pathlib import Path

import pytest

from appforge.core.config import Config, PipelineConfig, ProviderConfig, StorageConfig, ValidatorConfig
from appforge.core.exceptions import ProviderCallError
from appforge.providers.base import TextProvider

# Fails any file containing the marker, writing a tsc-style diagnostic to stderr.
CHECKER_SCRIPT = textwrap.dedent(
    """
    import sys
    from pathlib import Path

    path = Path(sys.argv[-1])
    if "SYNTAX_ERROR" in path.read_text(encoding="utf-8"):
        sys.stderr.write(f"{path.name}(3,1): error TS1005: ';' expected.\\n")
        sys.exit(2)
    """
)

VALID_COMPONENT = textwrap.dedent(
    """
    import React, { useState } from 'react';

    export const QuickCalc: React.FC = () => {
      const [value, setValue] = useState(0);
      return <div>{value}</div>;
    };
    """
).strip()


class FakeProvider(TextProvider):
    """Provider returning canned responses in order and recording prompts."""

    NAME = "fake"

    def __init__(self, responses=None, name="fake", error=None):
        self.responses = list(responses or [])
        self.prompts = []
        self.error = error
        self._name = name

    @classmethod
    def from_config(cls, config):
        return cls()

    def get_name(self):
        return self._name

    async def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if not self.responses:
            raise ProviderCallError(message="no canned response left", provider_name=self._name)
        return self.responses.pop(0)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def checker_script(temp_dir):
    """Write a stand-in static checker script and return its path."""
    script = temp_dir / "checker.py"
    script.write_text(CHECKER_SCRIPT, encoding="utf-8")
    return script


@pytest.fixture
def config(temp_dir, checker_script):
    """Configuration rooted in the temporary directory with the stand-in checker.

    Credentials are cleared so tests never depend on the environment.
    """
    return Config(
        provider=ProviderConfig(default_provider="fake"),
        validator=ValidatorConfig(command=[sys.executable, str(checker_script)]),
        storage=StorageConfig(
            apps_dir=temp_dir / "apps",
            images_dir=temp_dir / "images",
            images_base_url="http://testserver/generated-images",
        ),
        pipeline=PipelineConfig(image_api_url="http://testserver/api/gemini"),
        gemini_api_key=None,
        openai_api_key=None,
        anthropic_api_key=None,
    )


@pytest.fixture
def fake_provider_factory():
    """Build FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def valid_component():
    """A small component source the stand-in checker accepts."""
    return VALID_COMPONENT
