"""
video-frames - sample frames from a video and describe them with Claude.

This package contains the complete application:
- core: Framework-agnostic parsing, frame and analysis logic
- infrastructure: ffmpeg, Anthropic and local file storage
- config: Application configuration
- main: Command-line entry point
"""

__version__ = "1.0.0"
