"""Unit tests for the validation gate."""

import sys

import pytest

from appforge.core.config import ValidatorConfig
from appforge.validation import SKIPPED_WARNING, CheckerCommand, ValidationGate


def python_checker(code, **kwargs):
    return CheckerCommand(command=[sys.executable, "-c", code], **kwargs)


@pytest.mark.asyncio
class TestValidationGate:
    """Tests for running the external checker."""

    async def test_valid_file_passes(self, temp_dir, checker_script, valid_component):
        """Test a clean file passes with exit code 0."""
        path = temp_dir / "QuickCalc.tsx"
        path.write_text(valid_component, encoding="utf-8")
        gate = ValidationGate(CheckerCommand(command=[sys.executable, str(checker_script)]))

        result = await gate.validate(path)

        assert result.passed
        assert result.exit_code == 0
        assert not result.skipped

    async def test_invalid_file_fails_with_diagnostics(self, temp_dir, checker_script):
        """Test checker diagnostics are returned verbatim on failure."""
        path = temp_dir / "Broken.tsx"
        path.write_text("export const Broken = () => SYNTAX_ERROR", encoding="utf-8")
        gate = ValidationGate(CheckerCommand(command=[sys.executable, str(checker_script)]))

        result = await gate.validate(path)

        assert not result.passed
        assert result.exit_code == 2
        assert "Broken.tsx(3,1): error TS1005" in result.diagnostics

    async def test_nonzero_exit_without_diagnostics_passes(self, temp_dir):
        """Test a failing exit code with an empty diagnostic stream is accepted."""
        path = temp_dir / "A.tsx"
        path.write_text("x", encoding="utf-8")
        gate = ValidationGate(python_checker("import sys; sys.exit(1)"))

        result = await gate.validate(path)

        assert result.passed
        assert result.exit_code == 1

    async def test_stdout_diagnostics_are_ignored_by_default(self, temp_dir):
        """Test only stderr counts as diagnostics unless configured otherwise."""
        path = temp_dir / "A.tsx"
        path.write_text("x", encoding="utf-8")
        code = "import sys; print('error TS2304'); sys.exit(2)"

        assert (await ValidationGate(python_checker(code)).validate(path)).passed

        strict = ValidationGate(python_checker(code, diagnostics_stream="stdout"))
        result = await strict.validate(path)
        assert not result.passed
        assert "TS2304" in result.diagnostics

    async def test_missing_checker_is_skipped_with_warning(self, temp_dir):
        """Test an unlaunchable checker accepts the file with a warning."""
        path = temp_dir / "A.tsx"
        path.write_text("x", encoding="utf-8")
        gate = ValidationGate(CheckerCommand(command=["appforge-no-such-checker-binary"]))

        result = await gate.validate(path)

        assert result.passed
        assert result.skipped
        assert result.warning == SKIPPED_WARNING

    async def test_timeout_fails(self, temp_dir):
        """Test a checker exceeding its timeout fails validation."""
        path = temp_dir / "A.tsx"
        path.write_text("x", encoding="utf-8")
        gate = ValidationGate(python_checker("import time; time.sleep(10)", timeout_seconds=0.3))

        result = await gate.validate(path)

        assert not result.passed
        assert not result.skipped

    async def test_disabled_gate_passes_without_running(self, temp_dir):
        """Test a disabled gate never invokes the checker."""
        gate = ValidationGate(CheckerCommand(command=["appforge-no-such-checker-binary"]), enabled=False)

        result = await gate.validate(temp_dir / "missing.tsx")

        assert result.passed
        assert result.skipped


class TestCheckerCommand:
    """Tests for checker invocation settings."""

    def test_default_command_is_tsc(self, temp_dir):
        """Test the default checker type-checks the file without emitting."""
        argv = CheckerCommand().argv(temp_dir / "A.tsx")
        assert argv[:3] == ["npx", "tsc", "--noEmit"]
        assert argv[-1] == str(temp_dir / "A.tsx")

    def test_from_config(self):
        """Test the checker is built from validator configuration."""
        checker = CheckerCommand.from_config(
            ValidatorConfig(command=["tsc", "--noEmit"], timeout_seconds=30, diagnostics_stream="both")
        )
        assert checker.command == ["tsc", "--noEmit"]
        assert checker.timeout_seconds == 30
        assert checker.diagnostics_stream == "both"
