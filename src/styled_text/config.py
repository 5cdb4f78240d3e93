"""Configuration management for Styled Text."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from styled_text.formatting.ir import (
    DEFAULT_FOREGROUND_COLOR,
    BaseStyle,
    Font,
)


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Base style
    font_family: str = Field(
        default="system-ui",
        alias="STYLED_TEXT_FONT_FAMILY",
    )
    font_size: float = Field(
        default=13.0,
        gt=0,
        alias="STYLED_TEXT_FONT_SIZE",
    )
    foreground_color: str = Field(
        default=DEFAULT_FOREGROUND_COLOR,
        alias="STYLED_TEXT_FOREGROUND_COLOR",
    )

    # Images
    max_image_width: float = Field(
        default=800,
        alias="STYLED_TEXT_MAX_IMAGE_WIDTH",
    )
    image_dir: Optional[Path] = Field(
        default=None,
        alias="STYLED_TEXT_IMAGE_DIR",
    )

    def base_style(self) -> BaseStyle:
        """Build the base style described by these settings."""
        return BaseStyle(
            font=Font(family=self.font_family, size=self.font_size),
            foreground_color=self.foreground_color,
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
