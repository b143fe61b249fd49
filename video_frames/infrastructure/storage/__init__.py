"""
Local storage: the processed-video cache and analysis reports.
"""

from .cache import DEFAULT_CACHE_DIR, VideoCache, video_fingerprint
from .reports import save_report

__all__ = ["DEFAULT_CACHE_DIR", "VideoCache", "video_fingerprint", "save_report"]
