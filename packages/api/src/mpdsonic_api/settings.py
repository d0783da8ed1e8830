"""Application settings using pydantic-settings."""

from functools import cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MPDSONIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Subsonic credentials (required)
    user: str = Field(min_length=1, description="Subsonic username")
    password: str = Field(min_length=1, description="Subsonic password")

    # Must match MPD's music_directory for streaming to work
    music_directory: Path = Field(description="MPD music directory")

    # MPD connection
    mpd_host: str = Field(
        default="localhost", description="MPD host or UNIX socket path"
    )
    mpd_port: int = Field(default=6600, description="MPD port")
    mpd_password: str | None = Field(default=None, description="MPD password")
    mpd_timeout: float = Field(
        default=10.0, gt=0, description="MPD socket timeout in seconds"
    )
    keepalive_seconds: float = Field(
        default=0,
        ge=0,
        description="Interval between MPD keepalive pings (0 = disabled)",
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=4040, description="Server port")
    verbose: bool = Field(default=False, description="Log every request")
    log_level: LogLevel = Field(default="INFO", description="Log level")


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
