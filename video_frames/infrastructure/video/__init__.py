"""
Video processing infrastructure.

Samples frames from video files with the ffmpeg CLI and lists what it
produced.
"""

from .extractor import (
    FFmpegFrameExtractor,
    FrameExtractionError,
    build_filter_expression,
    create_frame_extractor,
)

__all__ = [
    "FFmpegFrameExtractor",
    "FrameExtractionError",
    "build_filter_expression",
    "create_frame_extractor",
]
