"""Unit tests for output sanitization and app naming."""

import pytest

from appforge.core.exceptions import ParseError
from appforge.generation import (
    FALLBACK_COMPONENT_NAME,
    derive_component_name,
    parse_naming,
    resolve_naming,
    sanitize,
    strip_fences,
    terminate_template_returns,
    wrap_in_fence,
)


class TestSanitizer:
    """Tests for provider output sanitization."""

    def test_strips_fence_with_language_tag(self):
        """Test a tsx-tagged fence is removed."""
        raw = "```tsx\nexport const A: React.FC = () => null;\n```"
        assert sanitize(raw) == "export const A: React.FC = () => null;"

    def test_strips_bare_fence_and_whitespace(self):
        """Test an untagged fence and surrounding whitespace are removed."""
        raw = "\n\n```\nconst x = 1;\n```\n\n"
        assert sanitize(raw) == "const x = 1;"

    def test_unfenced_text_is_only_trimmed(self):
        """Test unfenced text passes through trimmed."""
        assert strip_fences("  const x = 1;\n") == "const x = 1;"

    def test_fence_round_trip(self):
        """Test wrapping in a fence and sanitizing gives back the source."""
        source = "import React from 'react';\n\nexport const A: React.FC = () => <div />;"
        for language in ("tsx", "typescript", "jsx", ""):
            assert strip_fences(wrap_in_fence(source, language)) == source

    def test_terminates_template_literal_return(self):
        """Test a template-literal return gets a semicolon."""
        source = "const f = () => {\n  return `hello ${name}`\n};"
        assert "return `hello ${name}`;" in terminate_template_returns(source)

    def test_leaves_terminated_return_alone(self):
        """Test an already terminated return is not changed."""
        source = "return `a`;\nreturn `b` ;"
        assert terminate_template_returns(source) == source

    def test_sanitize_is_idempotent(self):
        """Test sanitizing twice equals sanitizing once."""
        raw = "```tsx\nconst f = () => { return `x` }\nconst g = () => { return `y`; }\n```"
        once = sanitize(raw)
        assert sanitize(once) == once
        assert once.count("`;") == 2

    def test_malformed_code_is_not_rejected(self):
        """Test sanitization never raises on garbage."""
        assert sanitize("```tsx\n<<<not code") == "<<<not code"


class TestComponentName:
    """Tests for component identifier derivation."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Quick Calc", "QuickCalc"),
            ("quick calc!", "QuickCalc"),
            ("TODO list", "TodoList"),
            ("  weather   DASHBOARD ", "WeatherDashboard"),
            ("Pomodoro-Timer", "Pomodorotimer"),
        ],
    )
    def test_derivation(self, name, expected):
        """Test names are stripped, split and title-cased."""
        assert derive_component_name(name) == expected

    def test_result_is_identifier(self):
        """Test derived names are valid identifiers starting uppercase."""
        for name in ("Hello, World", "ñandú app", "a", "3D Viewer", "x y z"):
            component = derive_component_name(name)
            assert component.isidentifier()
            assert component[0].isupper()
            assert component.isalnum()

    def test_empty_name_falls_back(self):
        """Test names without usable characters map to the fallback."""
        assert derive_component_name("!!! ???") == FALLBACK_COMPONENT_NAME
        assert derive_component_name("") == FALLBACK_COMPONENT_NAME

    def test_leading_digit_is_prefixed(self):
        """Test identifiers never start with a digit."""
        assert derive_component_name("3D Viewer") == "App3dViewer"

    def test_deterministic(self):
        """Test the same name always yields the same identifier."""
        assert derive_component_name("Quick Calc") == derive_component_name("Quick Calc")


class TestNaming:
    """Tests for naming payload parsing."""

    def test_parses_json_payload(self):
        """Test a plain JSON object is parsed."""
        naming = parse_naming('{"name": "Quick Calc", "shortDescription": "A calculator"}', "calc")
        assert naming.name == "Quick Calc"
        assert naming.short_description == "A calculator"

    def test_parses_fenced_payload(self):
        """Test a fenced JSON object is parsed."""
        raw = '```json\n{"name": "Quick Calc", "shortDescription": "A calculator"}\n```'
        assert parse_naming(raw, "calc").name == "Quick Calc"

    def test_parses_embedded_object(self):
        """Test an object surrounded by prose is found."""
        raw = 'Sure! Here it is: {"name": "Quick Calc", "shortDescription": "Adds"} Enjoy.'
        assert parse_naming(raw, "calc").short_description == "Adds"

    def test_missing_field_falls_back_per_field(self):
        """Test a missing field is replaced by the description alone."""
        naming = parse_naming('{"name": "Quick Calc"}', "a calculator")
        assert naming.name == "Quick Calc"
        assert naming.short_description == "a calculator"

    def test_malformed_payload_raises(self):
        """Test unparsable output raises ParseError."""
        with pytest.raises(ParseError):
            parse_naming("not json at all", "calc")

    def test_non_object_payload_raises(self):
        """Test a JSON array is rejected."""
        with pytest.raises(ParseError):
            parse_naming('["Quick Calc"]', "calc")

    def test_resolve_falls_back_to_description(self):
        """Test an unparsable payload uses the description for both fields."""
        naming, fell_back = resolve_naming("I cannot do that", "a tip calculator")
        assert fell_back
        assert naming.name == "a tip calculator"
        assert naming.short_description == "a tip calculator"
        assert derive_component_name(naming.name) == "ATipCalculator"

    def test_resolve_reports_success(self):
        """Test a good payload is not a fallback."""
        _, fell_back = resolve_naming('{"name": "X", "shortDescription": "Y"}', "d")
        assert not fell_back
