"""
Analysis orchestration.

Contains the analyzer service, the protocols it depends on and the
advisory usage estimate.
"""

from .analyzer import (
    EncodedImage,
    FrameSource,
    UsageEstimate,
    VideoAnalyzer,
    VisionModelClient,
    estimate_usage,
)

__all__ = [
    "EncodedImage",
    "FrameSource",
    "UsageEstimate",
    "VideoAnalyzer",
    "VisionModelClient",
    "estimate_usage",
]
