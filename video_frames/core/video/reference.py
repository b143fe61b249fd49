"""
Decorated video references.

Users point the tool at a video with a small string micro-format:

    video:clips/kitchen.mp4?fps=2&timestamps=1

The `video:` prefix is optional. Everything after the first `?` is a
query string of sampling options. This module turns that string into a
typed VideoReference at the boundary so nothing downstream has to look
at the raw string again.

Parsing is deliberately lenient. Bad option values fall back to defaults
instead of raising, and the filesystem is never touched here.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import unquote_plus

VIDEO_PREFIX = "video:"

DEFAULT_FPS = 1

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class SamplingOptions:
    """How densely to sample a video, and whether to burn in overlays."""
    fps: int = DEFAULT_FPS
    overlay_timestamps: bool = False

    def __post_init__(self) -> None:
        if self.fps < 1:
            raise ValueError("fps must be a positive integer")


@dataclass(frozen=True)
class VideoReference:
    """
    A video file plus the options it should be sampled with.

    Frozen because a reference is a value. Two references to the same
    path with the same options are interchangeable.
    """
    path: Path
    options: SamplingOptions = field(default_factory=SamplingOptions)

    @property
    def display_name(self) -> str:
        """File name without extension, used for reports."""
        return self.path.stem or "video"

    @property
    def decorated(self) -> str:
        """The wire form this reference was (or could have been) parsed from."""
        timestamps = 1 if self.options.overlay_timestamps else 0
        return f"{VIDEO_PREFIX}{self.path}?fps={self.options.fps}&timestamps={timestamps}"

    def __str__(self) -> str:
        return self.decorated


def ensure_video_prefix(raw: str) -> str:
    """Bare paths are accepted on the command line; decorate them."""
    if raw.startswith(VIDEO_PREFIX):
        return raw
    return f"{VIDEO_PREFIX}{raw}"


def _parse_query(query: str) -> dict[str, str]:
    """
    Split `a=1&b=2` into a dict, keeping the first value for each key.

    Pairs without `=` are treated as keys with an empty value, matching
    how browsers read query strings.
    """
    params: dict[str, str] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        params.setdefault(unquote_plus(key), unquote_plus(value))
    return params


def _parse_fps(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_FPS
    match = _LEADING_INT.match(value)
    if not match:
        return DEFAULT_FPS
    fps = int(match.group(1))
    # zero or negative rates make no sense for ffmpeg's fps filter
    return fps if fps >= 1 else DEFAULT_FPS


def parse_video_reference(reference: str) -> VideoReference:
    """
    Parse a decorated reference into a VideoReference.

    Recognised options:
    - fps: frames to sample per second of video (default 1)
    - timestamps: "1" burns elapsed time and file name into each frame

    Unknown keys are ignored. This never raises for a bad query string.
    """
    body = reference[len(VIDEO_PREFIX):] if reference.startswith(VIDEO_PREFIX) else reference
    path_part, _, query = body.partition("?")
    params = _parse_query(query)

    options = SamplingOptions(
        fps=_parse_fps(params.get("fps")),
        overlay_timestamps=params.get("timestamps") == "1",
    )
    return VideoReference(path=Path(path_part), options=options)
