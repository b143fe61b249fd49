"""
Frame extraction using FFmpeg.

One ffmpeg run per video: the fps filter picks frames at the requested
rate and writes them as numbered JPEGs into a directory. We then list
that directory to find out what was produced.

Optionally two drawtext filters burn the elapsed time and the source
file name into the bottom-right corner of every frame, which helps a
vision model talk about *when* something happens.

The decoder runs in a worker thread so the event loop stays free while
we wait. There is no timeout: a hung ffmpeg hangs the run.
"""

import asyncio
import logging
import re
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ...core.video.models import Frame
from ...core.video.reference import SamplingOptions, VideoReference

logger = logging.getLogger(__name__)


FRAME_PREFIX = "frame_"
FRAME_EXTENSION = "jpg"
FRAME_PATTERN = f"{FRAME_PREFIX}%04d.{FRAME_EXTENSION}"
FRAME_FILENAME = re.compile(rf"^{FRAME_PREFIX}\d{{4,}}\.{FRAME_EXTENSION}$")

# -q:v 2 is the high quality end of ffmpeg's JPEG scale (2-31, lower is better)
HIGH_QUALITY = 2

TEMP_DIR_PREFIX = "video-frames-"

_OVERLAY_STYLE = "fontcolor=white:box=1:boxcolor=black@0.5"


class FrameExtractionError(Exception):
    """
    Raised when ffmpeg fails.

    exit_code is None when the decoder never ran (binary missing).
    """

    def __init__(self, message: str, exit_code: Optional[int] = None, stderr: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


@dataclass(frozen=True)
class DecoderRun:
    """Outcome of a finished ffmpeg process."""
    returncode: int
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


def _escape_drawtext(text: str) -> str:
    """
    Make a file name safe inside a quoted drawtext value.

    Single quotes would end the quoted value early, so they become a
    typographic apostrophe. Backslashes and percent signs are escaped for
    drawtext's own expansion.
    """
    return (
        text.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("'", "’")
    )


def build_filter_expression(path: Path, options: SamplingOptions) -> str:
    """
    Build the -vf filter graph for a sampling run.

    Always selects frames with fps=N. With overlay_timestamps, adds the
    elapsed time (H:MM:SS.mmm) bottom-right and the file name just above.
    """
    terms = [f"fps={options.fps}"]

    if options.overlay_timestamps:
        filename = _escape_drawtext(path.name or "video")
        terms.append(
            "drawtext=text='%{pts\\:hms}'"
            f":x=W-tw-10:y=H-th-10:fontsize=24:{_OVERLAY_STYLE}"
        )
        terms.append(
            f"drawtext=text='{filename}'"
            f":x=W-tw-10:y=H-th-40:fontsize=18:{_OVERLAY_STYLE}"
        )

    return ",".join(terms)


def list_frames(directory: Path) -> list[Frame]:
    """
    Frames in a directory, in temporal order.

    Zero-padded sequence numbers make lexicographic order match the
    order ffmpeg wrote them.
    """
    names = sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and FRAME_FILENAME.match(entry.name)
    )
    return [Frame(path=directory / name) for name in names]


def resolve_output_dir(output_dir: Optional[Path]) -> Path:
    """Use the caller's directory (creating it) or make a fresh temp one."""
    if output_dir is None:
        return Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX))

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


class FFmpegFrameExtractor:
    """
    Samples frames from a video with the ffmpeg CLI.

    Frames are left on disk. Cleaning up the output directory is the
    caller's business.
    """

    def __init__(self, ffmpeg_path: str = "ffmpeg") -> None:
        """
        Args:
            ffmpeg_path: Path to ffmpeg binary (default assumes it's in PATH)
        """
        self._ffmpeg = ffmpeg_path

    def build_command(self, path: Path, options: SamplingOptions, output_dir: Path) -> list[str]:
        return [
            self._ffmpeg,
            "-y",  # overwrite frames from an earlier run
            "-i", str(path),
            "-vf", build_filter_expression(path, options),
            "-q:v", str(HIGH_QUALITY),
            str(output_dir / FRAME_PATTERN),
        ]

    async def extract(
        self,
        path: Path,
        options: SamplingOptions,
        output_dir: Optional[Path] = None,
    ) -> list[Frame]:
        """
        Run ffmpeg and return the frames it produced.

        Raises FrameExtractionError on a non-zero exit. Frames written
        before the failure are left on disk but never returned.
        An empty list is a valid result.
        """
        target_dir = resolve_output_dir(output_dir)
        cmd = self.build_command(path, options, target_dir)

        logger.info(
            f"Extracting frames from {path}",
            extra={
                "video": str(path),
                "fps": options.fps,
                "overlay_timestamps": options.overlay_timestamps,
                "output_dir": str(target_dir),
            },
        )
        logger.debug("FFmpeg args: %s", cmd)

        run = await self._run_decoder(cmd)
        if not run.succeeded:
            logger.error(
                "FFmpeg failed",
                extra={"exit_code": run.returncode, "stderr": run.stderr[-500:]},
            )
            raise FrameExtractionError(
                f"FFmpeg process exited with code {run.returncode}",
                exit_code=run.returncode,
                stderr=run.stderr,
            )

        frames = list_frames(target_dir)
        logger.info(f"Extracted {len(frames)} frames from video")
        return frames

    async def extract_reference(
        self,
        reference: VideoReference,
        output_dir: Optional[Path] = None,
    ) -> list[Frame]:
        return await self.extract(reference.path, reference.options, output_dir)

    async def _run_decoder(self, cmd: list[str]) -> DecoderRun:
        """Run ffmpeg to completion in a worker thread."""
        try:
            result = await asyncio.to_thread(
                subprocess.run,
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            raise FrameExtractionError(
                f"FFmpeg not found at '{self._ffmpeg}'. Install with: apt-get install ffmpeg"
            )

        return DecoderRun(returncode=result.returncode, stderr=result.stderr or "")


def create_frame_extractor(ffmpeg_path: str = "ffmpeg") -> FFmpegFrameExtractor:
    """Factory function for the frame extractor."""
    return FFmpegFrameExtractor(ffmpeg_path=ffmpeg_path)
