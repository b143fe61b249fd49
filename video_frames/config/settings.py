"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables (and a .env file)
with sensible defaults. Using Pydantic's BaseSettings means we get:
- Type validation at startup (fail fast if config is wrong)
- Documentation of what's required vs optional
- Easy testing with different configurations

Settings are read once, at the command-line boundary. Core code gets
explicit config objects and never touches the environment.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings loaded from environment variables."""

    # Anthropic Configuration
    anthropic_api_key: str = Field(
        default="",
        description="Claude API key. Only needed when a prompt is given."
    )
    anthropic_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Default Claude model. The --model flag overrides it."
    )
    anthropic_max_tokens: int = Field(
        default=4096,
        description="Max tokens for the generated description."
    )

    # Frame extraction
    ffmpeg_path: str = Field(
        default="ffmpeg",
        description="ffmpeg binary. Default assumes it's on PATH."
    )

    # Cache
    cache_dir: str = Field(
        default=".video_cache",
        description="Directory holding one marker file per processed video."
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validate_required_fields(self, needs_model: bool = True) -> list[str]:
        """
        Return the environment variables that are required but missing.

        The API key is only required when we're going to call the model;
        plain frame extraction works without it.
        """
        missing = []
        if needs_model and not self.anthropic_api_key:
            missing.append("ANTHROPIC_API_KEY")
        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache means we only load settings once per process.
    For tests, you can call get_settings.cache_clear() to reset.
    """
    return Settings()
