"""
Video analysis orchestration.

This module ties the pipeline together: extract frames, encode them,
send them with the user's prompt to a vision model, return the text.
It's framework-agnostic. It doesn't know about ffmpeg, Anthropic or the
command line, only about the two protocols below.

Cost numbers logged here are rough estimates for the operator. They are
never used to make decisions and shouldn't be read as billing data.
"""

import base64
import logging
import math
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from ..video.models import Frame
from ..video.reference import SamplingOptions, VideoReference

logger = logging.getLogger(__name__)


# Rough pricing, per thousand tokens
INPUT_COST_PER_THOUSAND = 0.075
OUTPUT_COST_PER_THOUSAND = 0.30

# ~1 token per 10KB of image, ~4 characters per text token
IMAGE_KB_PER_TOKEN = 10
CHARS_PER_TOKEN = 4

FRAME_MEDIA_TYPE = "image/jpeg"


@dataclass(frozen=True)
class EncodedImage:
    """A frame ready for transport: base64 text plus its content type."""
    media_type: str
    data: str


# ---------------------------------------------------------------------------
# Protocols (interfaces)
# ---------------------------------------------------------------------------

class FrameSource(Protocol):
    """Anything that can turn a video file into frames on disk."""

    async def extract(
        self,
        path: Path,
        options: SamplingOptions,
        output_dir: Optional[Path] = None,
    ) -> list[Frame]:
        ...


class VisionModelClient(Protocol):
    """
    Interface for vision-capable LLM clients.

    The analyzer doesn't care whether it's Claude or a fake in a test.
    It needs something that takes images plus a prompt and answers.
    """

    async def describe_images(
        self,
        images: list[EncodedImage],
        prompt: str,
    ) -> str:
        """Send images and prompt as one request, return the text reply."""
        ...


# ---------------------------------------------------------------------------
# Usage estimate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UsageEstimate:
    """Approximate token counts and cost for one analysis."""
    input_tokens: int
    output_tokens: int

    @property
    def input_cost(self) -> float:
        return self.input_tokens / 1000 * INPUT_COST_PER_THOUSAND

    @property
    def output_cost(self) -> float:
        return self.output_tokens / 1000 * OUTPUT_COST_PER_THOUSAND

    @property
    def total_cost(self) -> float:
        return self.input_cost + self.output_cost


def estimate_image_tokens(size_bytes: int) -> int:
    return math.ceil(size_bytes / 1024 / IMAGE_KB_PER_TOKEN)


def estimate_text_tokens(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def estimate_usage(
    image_sizes: list[int],
    prompt: str,
    response: str,
) -> UsageEstimate:
    """
    Linear approximation of token usage.

    Each image is estimated on its own (rounded up) so many small frames
    don't collapse to zero tokens.
    """
    input_tokens = sum(estimate_image_tokens(size) for size in image_sizes)
    input_tokens += estimate_text_tokens(prompt)
    return UsageEstimate(
        input_tokens=input_tokens,
        output_tokens=estimate_text_tokens(response),
    )


def encode_frame(frame: Frame) -> tuple[EncodedImage, int]:
    """Read a frame from disk and base64 it. Returns the raw size too."""
    data = frame.read_bytes()
    image = EncodedImage(
        media_type=FRAME_MEDIA_TYPE,
        data=base64.b64encode(data).decode("utf-8"),
    )
    return image, len(data)


# ---------------------------------------------------------------------------
# Analyzer Service
# ---------------------------------------------------------------------------

class VideoAnalyzer:
    """
    Runs one linear analysis per call: extract, encode, ask, return.

    No retries and no partial results. If extraction fails the model is
    never called; if the model call fails the error goes to the caller.
    """

    def __init__(self, frame_source: FrameSource, vision_client: VisionModelClient) -> None:
        self._frame_source = frame_source
        self._vision_client = vision_client

    async def analyze(
        self,
        reference: VideoReference,
        prompt: str,
        output_dir: Optional[Path] = None,
    ) -> str:
        frames = await self._frame_source.extract(
            reference.path,
            reference.options,
            output_dir,
        )

        images: list[EncodedImage] = []
        sizes: list[int] = []
        for frame in frames:
            image, size = encode_frame(frame)
            images.append(image)
            sizes.append(size)

        if not images:
            logger.warning(
                "No frames extracted, sending prompt without images",
                extra={"video": str(reference.path)},
            )

        logger.info(f"Sending {len(images)} frames for analysis")

        started = time.monotonic()
        text = await self._vision_client.describe_images(images, prompt)
        elapsed = time.monotonic() - started

        usage = estimate_usage(sizes, prompt, text)
        log_usage(usage, elapsed)

        return text


def log_usage(usage: UsageEstimate, elapsed_seconds: float) -> None:
    logger.info(
        f"Estimated input tokens: {usage.input_tokens:,} (${usage.input_cost:.4f}), "
        f"output tokens: {usage.output_tokens:,} (${usage.output_cost:.4f}), "
        f"total cost: ${usage.total_cost:.4f}, "
        f"processing time: {elapsed_seconds:.2f}s",
        extra={
            "input_tokens": usage.input_tokens,
            "output_tokens": usage.output_tokens,
            "total_cost": usage.total_cost,
            "elapsed_seconds": elapsed_seconds,
        },
    )
