"""
Infrastructure layer - external service integrations.

Each subdirectory wraps an external dependency:
- video: ffmpeg frame extraction
- anthropic: Claude API client
- storage: local cache markers and report files
"""
