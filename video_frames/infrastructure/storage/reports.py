"""
Analysis reports on disk.

A report is the raw analysis text in `<video>_analysis_<timestamp>.txt`.
No header, no metadata.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ...core.video.reference import VideoReference

logger = logging.getLogger(__name__)


def report_timestamp(now: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, made filename-safe."""
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    iso = iso.replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")


def report_filename(reference: VideoReference, now: datetime) -> str:
    return f"{reference.display_name}_analysis_{report_timestamp(now)}.txt"


def save_report(
    reference: VideoReference,
    analysis: str,
    output_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Write the analysis into output_dir (or the current directory)."""
    report_dir = Path(output_dir) if output_dir is not None else Path(".")
    report_dir.mkdir(parents=True, exist_ok=True)

    report_path = report_dir / report_filename(reference, now or datetime.now(timezone.utc))
    report_path.write_text(analysis, encoding="utf-8")

    logger.info("Report saved", extra={"path": str(report_path)})
    return report_path
