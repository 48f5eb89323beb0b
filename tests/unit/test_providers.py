"""Unit tests for providers and provider resolution."""

import sys
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import openai
import pytest
from google.genai import errors as genai_errors
from pydantic import SecretStr

from appforge.core.config import Config, ProviderConfig
from appforge.core.exceptions import ProviderCallError, ProviderConfigurationError, ProviderStartupError
from appforge.providers import (
    AnthropicProvider,
    GeminiProvider,
    LocalAgentProvider,
    OpenAIProvider,
    ProviderRegistry,
    ProviderResolver,
)


def gemini_response(*parts):
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def gemini_client(response=None, error=None):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    return client


def bare_config(**provider):
    return Config(
        provider=ProviderConfig(**provider),
        gemini_api_key=None,
        openai_api_key=None,
        anthropic_api_key=None,
    )


@pytest.mark.asyncio
class TestGeminiProvider:
    """Tests for the Gemini provider."""

    async def test_generate_text_joins_answer_parts(self):
        """Test answer parts are joined and thought parts skipped."""
        client = gemini_client(
            gemini_response(
                SimpleNamespace(text="thinking...", thought=True),
                SimpleNamespace(text="export const A", thought=False),
                SimpleNamespace(text=" = 1;", thought=None),
            )
        )
        provider = GeminiProvider(ProviderConfig(), client=client)

        assert await provider.generate_text("prompt") == "export const A = 1;"

        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-3-pro-preview"
        assert kwargs["contents"] == "prompt"
        assert kwargs["config"].temperature == 0.7
        assert kwargs["config"].max_output_tokens == 8192

    async def test_empty_response_raises(self):
        """Test a response without text is a call error."""
        provider = GeminiProvider(ProviderConfig(), client=gemini_client(SimpleNamespace(candidates=[])))
        with pytest.raises(ProviderCallError, match="No text generated"):
            await provider.generate_text("prompt")

    async def test_sdk_error_is_wrapped(self):
        """Test SDK failures surface as ProviderCallError."""
        error = genai_errors.ClientError(
            429, {"error": {"code": 429, "message": "quota exceeded", "status": "RESOURCE_EXHAUSTED"}}
        )
        provider = GeminiProvider(ProviderConfig(), client=gemini_client(error=error))
        with pytest.raises(ProviderCallError, match="quota exceeded") as exc_info:
            await provider.generate_text("prompt")
        assert exc_info.value.cause is error

    async def test_programming_errors_propagate(self):
        """Test non-SDK exceptions are not disguised as provider failures."""
        provider = GeminiProvider(ProviderConfig(), client=gemini_client(error=AttributeError("no attr")))
        with pytest.raises(AttributeError):
            await provider.generate_text("prompt")
        with pytest.raises(AttributeError):
            await provider.generate_image("a cat")

    async def test_generate_image_returns_inline_data(self):
        """Test the first inline image is returned."""
        inline = SimpleNamespace(data=b"\x89PNG", mime_type="image/png")
        client = gemini_client(gemini_response(SimpleNamespace(text=None, inline_data=inline)))
        provider = GeminiProvider(ProviderConfig(), client=client)

        image = await provider.generate_image("a cat", aspect_ratio="1:1")

        assert image.data == b"\x89PNG"
        assert image.extension == "png"
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash-image"

    async def test_edit_image_without_result_raises(self):
        """Test a response with no image is a call error."""
        client = gemini_client(gemini_response(SimpleNamespace(text="sorry", inline_data=None)))
        provider = GeminiProvider(ProviderConfig(), client=client)
        with pytest.raises(ProviderCallError, match="No edited image generated"):
            await provider.edit_image("make it blue", b"\x89PNG")


@pytest.mark.asyncio
class TestOpenAIProvider:
    """Tests for the OpenAI provider."""

    async def test_generate_text(self):
        """Test the first choice's content is returned."""
        client = MagicMock()
        client.chat.completions.create = AsyncMock(
            return_value=SimpleNamespace(
                choices=[SimpleNamespace(message=SimpleNamespace(content="code"), finish_reason="stop")]
            )
        )
        provider = OpenAIProvider(ProviderConfig(), client=client)

        assert await provider.generate_text("prompt") == "code"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]
        assert kwargs["model"] == "gpt-4o"

    async def test_api_error_is_wrapped(self):
        """Test SDK errors surface as ProviderCallError."""
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=openai.OpenAIError("bad key"))
        provider = OpenAIProvider(ProviderConfig(), client=client)
        with pytest.raises(ProviderCallError, match="bad key"):
            await provider.generate_text("prompt")


@pytest.mark.asyncio
class TestAnthropicProvider:
    """Tests for the Anthropic provider."""

    async def test_generate_text_joins_text_blocks(self):
        """Test text blocks are concatenated."""
        client = MagicMock()
        client.messages.create = AsyncMock(
            return_value=SimpleNamespace(
                content=[
                    SimpleNamespace(type="text", text="part one "),
                    SimpleNamespace(type="tool_use"),
                    SimpleNamespace(type="text", text="part two"),
                ],
                stop_reason="end_turn",
            )
        )
        provider = AnthropicProvider(ProviderConfig(), client=client)

        assert await provider.generate_text("prompt") == "part one part two"

    async def test_api_error_is_wrapped(self):
        """Test SDK errors surface as ProviderCallError."""
        client = MagicMock()
        client.messages.create = AsyncMock(side_effect=anthropic.AnthropicError("overloaded"))
        provider = AnthropicProvider(ProviderConfig(), client=client)
        with pytest.raises(ProviderCallError, match="overloaded"):
            await provider.generate_text("prompt")


@pytest.mark.asyncio
class TestLocalAgentProvider:
    """Tests for the local command-line agent provider."""

    async def test_prompt_goes_through_stdin(self):
        """Test the prompt is piped to the agent and stdout returned."""
        provider = LocalAgentProvider([sys.executable, "-c", "import sys; print(sys.stdin.read().upper())"])
        assert (await provider.generate_text("say `hi` & $(rm -rf /)")).strip() == "SAY `HI` & $(RM -RF /)"

    async def test_nonzero_exit_raises_with_stderr(self):
        """Test a failing agent reports its stderr and exit code."""
        provider = LocalAgentProvider(
            [sys.executable, "-c", "import sys; sys.stderr.write('not logged in'); sys.exit(3)"]
        )
        with pytest.raises(ProviderCallError) as exc_info:
            await provider.generate_text("prompt")
        assert exc_info.value.exit_code == 3
        assert exc_info.value.message == "not logged in"

    async def test_nonzero_exit_without_stderr_uses_generic_message(self):
        """Test an empty stderr gets a generic message."""
        provider = LocalAgentProvider([sys.executable, "-c", "import sys; sys.exit(1)"])
        with pytest.raises(ProviderCallError, match="process failed"):
            await provider.generate_text("prompt")

    async def test_missing_executable_is_startup_error(self):
        """Test an unlaunchable agent raises ProviderStartupError."""
        provider = LocalAgentProvider(["appforge-no-such-agent-binary", "--print"])
        with pytest.raises(ProviderStartupError):
            await provider.generate_text("prompt")


@pytest.mark.parametrize("provider_class", [GeminiProvider, OpenAIProvider, AnthropicProvider])
def test_missing_key_is_configuration_error(provider_class):
    """Test API providers cannot be built without their key."""
    with pytest.raises(ProviderConfigurationError):
        provider_class.from_config(bare_config())


class TestProviderResolver:
    """Tests for provider resolution."""

    def test_builtin_providers_are_registered(self):
        """Test every built-in provider is selectable."""
        assert {"claude", "gemini", "openai", "anthropic"} <= set(ProviderRegistry.list_providers())

    def test_default_provider(self):
        """Test a missing name resolves to the configured default."""
        provider = ProviderResolver(bare_config()).resolve(None)
        assert isinstance(provider, LocalAgentProvider)

    def test_names_are_case_insensitive_and_cached(self):
        """Test resolution ignores case and reuses instances."""
        resolver = ProviderResolver(bare_config())
        assert resolver.resolve("CLAUDE") is resolver.resolve("claude")

    def test_unknown_provider(self):
        """Test an unknown name lists the supported providers."""
        with pytest.raises(ProviderConfigurationError) as exc_info:
            ProviderResolver(bare_config()).resolve("foo")
        assert "Unknown AI provider: foo" in exc_info.value.message
        assert "claude" in exc_info.value.message

    def test_missing_credential(self):
        """Test an API provider without its key is a configuration error."""
        with pytest.raises(ProviderConfigurationError):
            ProviderResolver(bare_config()).resolve("anthropic")

    def test_installed_instance_wins(self, fake_provider_factory):
        """Test a pre-built provider is used for its name."""
        resolver = ProviderResolver(bare_config())
        fake = fake_provider_factory(name="openai")
        resolver.install(fake)
        assert resolver.resolve("openai") is fake

    def test_hosted_requires_gemini_key_at_startup(self):
        """Test hosted mode fails fast without a Gemini key."""
        with pytest.raises(ProviderConfigurationError):
            ProviderResolver(bare_config(deployment="hosted"))

    def test_hosted_substitutes_gemini(self):
        """Test hosted mode serves every request with Gemini."""
        config = bare_config(deployment="hosted").model_copy(update={"gemini_api_key": SecretStr("test-key")})
        resolver = ProviderResolver(config)
        assert resolver.normalize("claude") == "gemini"
        assert isinstance(resolver.resolve("openai"), GeminiProvider)
