import logging
import sys
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App config
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    DEBUG: bool = False

    # WebSocket config
    WS_MAX_MESSAGE_SIZE: int = 64 * 1024  # 64 KB
    WS_MAX_MESSAGES_PER_SECOND: int = 10
    WS_RATE_LIMIT_WINDOW: float = 1.0  # seconds

    # Match config
    ALLOW_REINITIALIZE: bool = False

    @field_validator("WS_MAX_MESSAGE_SIZE", "WS_MAX_MESSAGES_PER_SECOND")
    @classmethod
    def validate_positive_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("WebSocket limits must be positive")
        return v

    @field_validator("WS_RATE_LIMIT_WINDOW")
    @classmethod
    def validate_rate_limit_window(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("WS_RATE_LIMIT_WINDOW must be positive")
        return v


def configure_logging(debug: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    configure_logging(settings.DEBUG)
    logger.info("Settings loaded successfully")
    logger.debug("Reinitialize allowed: %s", settings.ALLOW_REINITIALIZE)
    return settings
