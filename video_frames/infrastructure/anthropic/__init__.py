"""
Anthropic Claude API client wrapper.

Implements the VisionModelClient protocol from core.analysis.analyzer.
"""

from .client import (
    DEFAULT_MODEL,
    AnthropicClientError,
    AnthropicConfig,
    AnthropicVisionClient,
    create_anthropic_client,
)

__all__ = [
    "DEFAULT_MODEL",
    "AnthropicClientError",
    "AnthropicConfig",
    "AnthropicVisionClient",
    "create_anthropic_client",
]
