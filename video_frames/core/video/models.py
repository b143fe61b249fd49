"""
Domain models for extracted frames.

A frame is just a file on disk. We keep the path rather than the bytes
so a long video doesn't have to sit in memory between extraction and
analysis.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Frame:
    """One extracted still image."""
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()
