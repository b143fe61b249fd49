"""
Presence-only cache of processed videos.

A video counts as processed when a marker file named after its
fingerprint exists in the cache directory. The fingerprint is an MD5 of
the absolute path, modification time and size, so touching or editing
the file invalidates it.

The marker holds a timestamp for humans; it is never read back.
The prompt is not part of the fingerprint, so a video analysed once with
any prompt counts as processed for every prompt.

No locking. Two runs racing on the same marker both write it, which is
harmless.
"""

import hashlib
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


DEFAULT_CACHE_DIR = ".video_cache"
MARKER_SUFFIX = ".processed"


def video_fingerprint(video_path: Path) -> str:
    """MD5 of `<absolute path>:<mtime in ms>:<size>`. Raises OSError if the file is missing."""
    absolute = os.path.abspath(video_path)
    stats = os.stat(absolute)
    mtime_ms = stats.st_mtime_ns // 1_000_000
    digest = hashlib.md5(f"{absolute}:{mtime_ms}:{stats.st_size}".encode("utf-8"))
    return digest.hexdigest()


class VideoCache:
    """Marker files in a single directory, one per processed video."""

    def __init__(self, cache_dir: Path = Path(DEFAULT_CACHE_DIR)) -> None:
        self._cache_dir = Path(cache_dir)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def marker_path(self, video_path: Path) -> Path:
        return self._cache_dir / f"{video_fingerprint(video_path)}{MARKER_SUFFIX}"

    def is_processed(self, video_path: Path) -> bool:
        """
        True if a marker exists for this exact file.

        Fails open: a missing cache dir, missing marker or unreadable
        video all count as a miss.
        """
        try:
            return self.marker_path(video_path).is_file()
        except OSError as e:
            logger.debug("Cache lookup failed, treating as miss", extra={"error": str(e)})
            return False

    def mark_processed(self, video_path: Path) -> Path:
        """Write the marker. I/O errors propagate."""
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        marker = self.marker_path(video_path)
        marker.write_text(datetime.now(timezone.utc).isoformat(), encoding="utf-8")
        logger.debug("Marked video as processed", extra={"marker": str(marker)})
        return marker
