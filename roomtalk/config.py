"""Roomtalk configuration management."""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


class RoomtalkSettings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    # Canonical origin used as the base when normalizing chat URLs
    base_url: str = Field(
        default="https://localhost/",
        description="Service origin that relative or malformed URLs resolve against",
    )

    # Message limits
    max_message_length: int = Field(default=300, description="Max chat message length after trimming")
    max_rooms: int = Field(default=10, description="Max resolved room references per message")
    max_files: int = Field(default=5, description="Max resolved file references per message")
    max_motd_length: int = Field(default=500, description="Max raw MOTD length")

    # Remote lookups, templates containing {key}
    room_lookup_url: Optional[str] = Field(default=None, description="Room metadata endpoint")
    file_lookup_url: Optional[str] = Field(default=None, description="File metadata endpoint")
    resolver_timeout: Optional[float] = Field(default=None, description="Per-lookup timeout in seconds")

    debug: bool = Field(default=False, description="Debug logging, same as the CLI --verbose flag")

    model_config = {"env_prefix": "ROOMTALK_", "env_file": ".env", "extra": "ignore"}


def load_settings() -> RoomtalkSettings:
    """Load settings from environment."""
    settings = RoomtalkSettings()

    import logging
    logger = logging.getLogger("roomtalk.config")
    if not settings.base_url.startswith("https://"):
        logger.warning(
            f"Base URL {settings.base_url!r} is not https. Scheme-less links "
            "still normalize to https, but relative fragments will resolve "
            "against an insecure origin."
        )

    return settings
