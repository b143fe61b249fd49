"""
Command-line entry point.

Usage:
    video-frames clip.mp4                          extract frames at 1 fps
    video-frames "video:clip.mp4?fps=2&timestamps=1" -o frames/
    video-frames clip.mp4 "What happens here?" --save-report

Without a prompt the tool only extracts frames and prints a summary.
With a prompt it checks the cache, sends the frames to Claude, marks the
video as processed and prints the answer.

Requires:
    - ffmpeg on PATH (or FFMPEG_PATH)
    - ANTHROPIC_API_KEY in the environment or .env, when a prompt is given
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .config.options import RunOptions
from .config.settings import Settings, get_settings
from .core.analysis.analyzer import VideoAnalyzer
from .core.video.models import Frame
from .core.video.reference import VideoReference, ensure_video_prefix, parse_video_reference
from .infrastructure.anthropic.client import AnthropicConfig, create_anthropic_client
from .infrastructure.storage.cache import VideoCache
from .infrastructure.storage.reports import save_report
from .infrastructure.video.extractor import create_frame_extractor

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="video-frames",
        description="Extract frames from a video and optionally describe them with Claude",
    )
    parser.add_argument(
        "video",
        help="Path to video file with optional parameters (e.g. video.mp4?fps=2&timestamps=1)",
    )
    parser.add_argument(
        "prompt",
        nargs="?",
        help="Analysis prompt (if provided, frames are sent to the model)",
    )
    parser.add_argument("-m", "--model", help="Claude model to use (default from ANTHROPIC_MODEL)")
    parser.add_argument("-o", "--output", help="Output directory for frames (default: temp directory)")
    parser.add_argument("-s", "--save-report", action="store_true", help="Save analysis report to file")
    parser.add_argument(
        "--no-cache",
        dest="cache",
        action="store_false",
        help="Skip cache check (always process video)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


def print_extraction_summary(frames: list[Frame]) -> None:
    output_dir = str(frames[0].path.parent) if frames else "N/A"
    print("\nExtraction Summary:")
    print(f"   Total frames: {len(frames)}")
    print(f"   Output directory: {output_dir}")
    print("\nFrame files:")
    for index, frame in enumerate(frames, start=1):
        print(f"   {index}: {frame.name}")


async def extract_only(
    reference: VideoReference,
    options: RunOptions,
    settings: Settings,
) -> int:
    print("Extracting frames from video...")
    extractor = create_frame_extractor(settings.ffmpeg_path)
    frames = await extractor.extract(reference.path, reference.options, options.output_dir)
    print_extraction_summary(frames)
    return 0


async def analyze(
    reference: VideoReference,
    prompt: str,
    options: RunOptions,
    settings: Settings,
) -> int:
    cache = VideoCache(Path(settings.cache_dir))

    if options.use_cache and cache.is_processed(reference.path):
        print("Video already processed (use --no-cache to force reprocessing)")
        return 0

    missing = settings.validate_required_fields(needs_model=True)
    if missing:
        print(f"Error: missing required configuration: {', '.join(missing)}", file=sys.stderr)
        return 1

    config = AnthropicConfig(
        api_key=settings.anthropic_api_key,
        model=options.model,
        max_tokens=settings.anthropic_max_tokens,
    )
    analyzer = VideoAnalyzer(
        frame_source=create_frame_extractor(settings.ffmpeg_path),
        vision_client=create_anthropic_client(config),
    )

    print(f"Starting video analysis with {options.model}...")
    analysis = await analyzer.analyze(reference, prompt, options.output_dir)

    if options.use_cache:
        cache.mark_processed(reference.path)

    if options.save_report:
        report_path = save_report(reference, analysis, options.output_dir)
        print(f"\nReport saved to: {report_path}")

    print("\nAnalysis Result:")
    print(analysis)
    return 0


async def run(
    reference: VideoReference,
    prompt: Optional[str],
    options: RunOptions,
    settings: Settings,
) -> int:
    if not reference.path.is_file():
        print(f"Error: video file not found: {reference.path}", file=sys.stderr)
        return 1

    if prompt:
        return await analyze(reference, prompt, options, settings)
    return await extract_only(reference, options, settings)


def main(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    args = build_parser().parse_args(argv)

    try:
        reference = parse_video_reference(ensure_video_prefix(args.video))
        options = RunOptions.from_args(args, default_model=settings.anthropic_model)
        logger.debug("Parsed video reference", extra={"reference": reference.decorated})
        return asyncio.run(run(reference, args.prompt, options, settings))
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Run failed", exc_info=e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
