"""
gifzoom configuration using Pydantic Settings.
Every section can be overridden through environment variables or a .env file.
"""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()


class FFmpegSettings(BaseSettings):
    path: str = ""
    timeout: int = 600
    log_level: str = "error"

    model_config = {"env_prefix": "FFMPEG_"}


class ExportDefaultsSettings(BaseSettings):
    fps: int = 15
    width: int = 600
    colors: int = 256
    dither: int = 5
    loop: int = 0
    quality: str = "high"
    output_extension: str = ".gif"

    model_config = {"env_prefix": "EXPORT_"}


class InteractionSettings(BaseSettings):
    handle_hit_radius: float = 30.0
    marker_hit_radius: float = 8.0
    min_crop_size: float = 20.0
    trim_min_gap: float = 0.5
    zoom_min_gap: float = 0.1

    model_config = {"env_prefix": "INTERACTION_"}


class BackgroundDefaultsSettings(BaseSettings):
    enabled: bool = False
    color: str = "#292929"
    padding: float = 0.1
    border_radius: int = 16

    model_config = {"env_prefix": "BACKGROUND_"}


class WebSettings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])

    model_config = {"env_prefix": "WEB_"}


class LoggingSettings(BaseSettings):
    level: str = "INFO"
    ffmpeg_level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    # Pillow logs every PNG chunk at DEBUG
    quiet_loggers: list[str] = ["PIL", "multipart"]

    model_config = {"env_prefix": "LOG_"}


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    app_env: str = "development"

    ffmpeg: FFmpegSettings = Field(default_factory=FFmpegSettings)
    export: ExportDefaultsSettings = Field(default_factory=ExportDefaultsSettings)
    interaction: InteractionSettings = Field(default_factory=InteractionSettings)
    background: BackgroundDefaultsSettings = Field(default_factory=BackgroundDefaultsSettings)
    web: WebSettings = Field(default_factory=WebSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
