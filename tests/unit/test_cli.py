"""Unit tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from appforge import __version__
from appforge import cli
from appforge.cli import app
from appforge.core.config import get_config

runner = CliRunner()


@pytest.fixture
def cli_env(temp_dir, monkeypatch):
    """Point the CLI at the temporary directory and reset cached config."""
    monkeypatch.setenv("APPFORGE_APPS_DIR", str(temp_dir / "apps"))
    monkeypatch.setenv("APPFORGE_IMAGES_DIR", str(temp_dir / "images"))
    monkeypatch.setenv("APPFORGE_DEPLOYMENT", "local")
    monkeypatch.setattr(cli.console, "width", 200)
    get_config.cache_clear()
    yield temp_dir
    get_config.cache_clear()


def test_version():
    """Test --version prints the package version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_list_empty(cli_env):
    """Test listing with no catalog."""
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "No apps yet" in result.output


def test_list_shows_entries(cli_env):
    """Test catalog entries are listed."""
    apps_dir = cli_env / "apps"
    apps_dir.mkdir()
    (apps_dir / "apps.json").write_text(
        json.dumps(
            [
                {
                    "id": "1700000000000-abc123",
                    "name": "Quick Calc",
                    "componentName": "QuickCalc",
                    "fileName": "QuickCalc.tsx",
                    "description": "Adds numbers",
                    "createdAt": "2024-01-01T00:00:00Z",
                    "aiProvider": "claude",
                }
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "Quick Calc" in result.output


def test_delete_unknown_exits_nonzero(cli_env):
    """Test a failed operation exits with status 1."""
    result = runner.invoke(app, ["delete", "nope", "--yes"])
    assert result.exit_code == 1
    assert "App not found" in result.output


def test_config_shows_settings(cli_env):
    """Test the configuration table is printed."""
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "Default Provider" in result.output


def test_invalid_configuration_exits_nonzero(cli_env, monkeypatch):
    """Test an out-of-range setting is reported without a traceback."""
    monkeypatch.setenv("APPFORGE_CHECKER_TIMEOUT", "-1")
    get_config.cache_clear()

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert "timeout_seconds" in result.output
