"""Configuration management for the Identicon Service.

Configuration is handled by Pydantic Settings.  Every field can be overridden
with an environment variable carrying the ``IDENTICON_`` prefix, or through a
``.env`` file in the working directory.

Loading priority:
1. Environment variables (IDENTICON_* prefix)
2. .env file in the project root
3. Default values defined in IdenticonConfig

Example .env file:
    IDENTICON_SERVER_PORT=9000
    IDENTICON_LOG_LEVEL=DEBUG
    IDENTICON_BACKGROUND=[255, 255, 255]
    IDENTICON_JPEG_QUALITY=90

The defaults reproduce the documented HTTP behaviour exactly (light grey
background, ``max-age=36000`` caching), so an unconfigured deployment answers
the same way as any other.

Usage Example
-------------
    from identicon_service.core.config import config

    print(config.background)
    print(config.cache_max_age)
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IdenticonConfig(BaseSettings):
    """Main configuration for the Identicon Service.

    Attributes
    ----------
    Server Settings:
        server_host : str
            Bind address for uvicorn.
        server_port : int
            Bind port for uvicorn (1024-65535).
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logger level, also passed to uvicorn.

    Rendering Settings:
        background : tuple[int, int, int]
            RGB colour used for the border and empty cells.
        jpeg_quality : int
            Pillow JPEG quality (1-95).
        max_scale : int
            Largest accepted ``scale`` query value, in pixels.

    Response Settings:
        cache_max_age : int
            Seconds placed in the ``Cache-Control: public,max-age=...`` header.

    Examples
    --------
        >>> custom = IdenticonConfig(background=(255, 255, 255), jpeg_quality=80)
        >>> custom.background
        (255, 255, 255)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IDENTICON_",
        case_sensitive=False,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for all interfaces)",
    )
    server_port: int = Field(
        default=8787,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the application and uvicorn",
    )

    # Rendering settings
    background: tuple[int, int, int] = Field(
        default=(240, 240, 240),
        description="RGB background colour for the border and empty cells",
    )
    jpeg_quality: int = Field(
        default=95,
        description="JPEG encoder quality; flat-colour images stay near-lossless at 95",
        ge=1,
        le=95,
    )
    max_scale: int = Field(
        default=4096,
        description="Largest canvas edge, in pixels, a request may ask for",
        ge=1,
    )

    # Response settings
    cache_max_age: int = Field(
        default=36000,
        description="Cache-Control max-age in seconds for generated images",
        ge=0,
    )

    @field_validator("background")
    @classmethod
    def _check_channels(cls, value: tuple[int, int, int]) -> tuple[int, int, int]:
        """Reject channel values outside 0-255."""
        for channel in value:
            if channel < 0 or channel > 255:
                raise ValueError(f"Background channels must be 0-255, got {value}")
        return value


# Global configuration instance, loaded once at import time from the
# environment (IDENTICON_* prefix) and .env file.
config = IdenticonConfig()
