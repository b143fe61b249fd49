"""
Video references and frames.

Parsing of the `video:<path>?fps=<n>&timestamps=<0|1>` format and the
value objects that flow between extraction and analysis.
"""

from .models import Frame
from .reference import (
    DEFAULT_FPS,
    VIDEO_PREFIX,
    SamplingOptions,
    VideoReference,
    ensure_video_prefix,
    parse_video_reference,
)

__all__ = [
    "DEFAULT_FPS",
    "VIDEO_PREFIX",
    "Frame",
    "SamplingOptions",
    "VideoReference",
    "ensure_video_prefix",
    "parse_video_reference",
]
