"""Text-generation providers for AppForge.

Importing this package registers every built-in provider.
"""

from .base import ImageCapable, TextProvider
from .registry import ProviderRegistry, ProviderResolver
from .anthropic_chat import AnthropicProvider
from .gemini import GeminiProvider
from .local_agent import LocalAgentProvider
from .openai_chat import OpenAIProvider

__all__ = [
    "ImageCapable",
    "TextProvider",
    "ProviderRegistry",
    "ProviderResolver",
    "AnthropicProvider",
    "GeminiProvider",
    "LocalAgentProvider",
    "OpenAIProvider",
]
