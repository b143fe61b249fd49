"""
Anthropic Claude API client wrapper.

This module provides a thin wrapper around the Anthropic SDK that:
1. Implements our VisionModelClient protocol
2. Turns encoded frames into Claude's message content format
3. Provides consistent error handling

Retries are switched off in the SDK. A failed call fails the run, and
the original SDK error stays attached as the cause.
"""

import logging
from dataclasses import dataclass

import anthropic
from anthropic import APIError

from ...core.analysis.analyzer import EncodedImage, VisionModelClient


logger = logging.getLogger(__name__)


DEFAULT_MODEL = "claude-sonnet-4-20250514"


class AnthropicClientError(Exception):
    """Raised when API calls fail."""
    pass


@dataclass
class AnthropicConfig:
    """
    Configuration for the Anthropic client.

    Built once at startup from Settings and the command line, then
    handed to the client. Nothing below this reads the environment.
    """
    api_key: str
    model: str = DEFAULT_MODEL
    max_tokens: int = 4096

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("API key is required")
        if not self.model:
            raise ValueError("model is required")
        if self.max_tokens < 1:
            raise ValueError("max_tokens must be positive")


class AnthropicVisionClient(VisionModelClient):
    """
    Implementation of VisionModelClient using Claude.

    Knows Anthropic's request format but nothing about videos. It sends
    images and text, gets text back.
    """

    def __init__(self, config: AnthropicConfig) -> None:
        self._config = config
        self._client = anthropic.AsyncAnthropic(api_key=config.api_key, max_retries=0)

    @property
    def model(self) -> str:
        return self._config.model

    async def describe_images(
        self,
        images: list[EncodedImage],
        prompt: str,
    ) -> str:
        """
        Send all frames and the prompt as a single user message.

        Images keep their order so the model sees them chronologically.
        """
        content = self._build_image_content(images, prompt)

        try:
            response = await self._client.messages.create(
                model=self._config.model,
                max_tokens=self._config.max_tokens,
                messages=[
                    {"role": "user", "content": content}
                ],
            )
        except APIError as e:
            logger.error(
                "API error",
                extra={"error": str(e), "status": getattr(e, "status_code", None)},
            )
            raise AnthropicClientError(f"API error: {e.message}") from e

        return self._extract_text_response(response)

    def _build_image_content(
        self,
        images: list[EncodedImage],
        text_prompt: str,
    ) -> list[dict]:
        """
        Build the content array for a multi-image request.

        Claude expects:
        [
            {"type": "image", "source": {"type": "base64", "media_type": "image/jpeg", "data": "..."}},
            {"type": "image", "source": {...}},
            {"type": "text", "text": "..."}
        ]
        """
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": image.media_type,
                    "data": image.data,
                },
            }
            for image in images
        ]

        # prompt goes last, after all frames
        content.append({
            "type": "text",
            "text": text_prompt,
        })

        return content

    def _extract_text_response(self, response) -> str:
        """Extract text content from API response."""
        if not response.content:
            return ""

        text_blocks = [
            block.text
            for block in response.content
            if hasattr(block, "text")
        ]

        return "\n".join(text_blocks)


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_anthropic_client(config: AnthropicConfig) -> AnthropicVisionClient:
    """Factory function to create a configured client."""
    return AnthropicVisionClient(config)
