"""
Application configuration.

Settings come from environment variables via Pydantic settings;
RunOptions come from the command line.
"""

from .options import RunOptions
from .settings import Settings, get_settings

__all__ = ["RunOptions", "Settings", "get_settings"]
