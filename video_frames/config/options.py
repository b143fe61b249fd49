"""
Per-run options from the command line.

A closed record instead of an argparse Namespace passed around, so the
rest of the program can't grow hidden flags.
"""

from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class RunOptions:
    model: str
    output_dir: Optional[Path] = None
    save_report: bool = False
    use_cache: bool = True

    def __post_init__(self) -> None:
        if not self.model or not self.model.strip():
            raise ValueError("model must not be empty")

    @classmethod
    def from_args(cls, args: Namespace, default_model: str) -> "RunOptions":
        return cls(
            model=args.model or default_model,
            output_dir=Path(args.output) if args.output else None,
            save_report=bool(args.save_report),
            use_cache=bool(args.cache),
        )
