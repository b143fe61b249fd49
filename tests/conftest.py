"""
Shared fixtures.

Nothing here touches the network or a real ffmpeg. The decoder is faked
by replacing subprocess.run with a function that writes numbered JPEGs
into the output pattern it was given.
"""

import subprocess
from pathlib import Path
from typing import Callable

import pytest

from video_frames.config.settings import Settings

# Smallest byte sequence that looks like a JPEG to anyone sniffing headers
FAKE_JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 60 + b"\xff\xd9"


class FakeDecoder:
    """
    Stand-in for `subprocess.run` when it's called with an ffmpeg command.

    Writes `frame_count` files through the command's output pattern and
    exits with `returncode`. Every call is recorded for assertions.
    """

    def __init__(self, frame_count: int = 0, returncode: int = 0, stderr: str = "") -> None:
        self.frame_count = frame_count
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        pattern = cmd[-1]
        for i in range(1, self.frame_count + 1):
            Path(pattern % i).write_bytes(FAKE_JPEG)
        return subprocess.CompletedProcess(cmd, self.returncode, stdout="", stderr=self.stderr)

    @property
    def last_filter(self) -> str:
        cmd = self.calls[-1]
        return cmd[cmd.index("-vf") + 1]


@pytest.fixture
def fake_decoder(monkeypatch) -> Callable[..., FakeDecoder]:
    """Install a FakeDecoder as subprocess.run and return it."""

    def install(frame_count: int = 0, returncode: int = 0, stderr: str = "") -> FakeDecoder:
        decoder = FakeDecoder(frame_count=frame_count, returncode=returncode, stderr=stderr)
        monkeypatch.setattr(subprocess, "run", decoder)
        return decoder

    return install


@pytest.fixture
def sample_video(tmp_path) -> Path:
    """A file that stands in for a video. Only its path, size and mtime matter."""
    video = tmp_path / "sample.mp4"
    video.write_bytes(b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 100)
    return video


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the developer's .env and cache."""
    return Settings(
        _env_file=None,
        anthropic_api_key="test-key",
        cache_dir=str(tmp_path / ".video_cache"),
        log_level="WARNING",
    )
