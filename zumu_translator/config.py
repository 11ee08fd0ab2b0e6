"""SDK configuration loaded from environment variables."""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Literal
from functools import lru_cache


DEFAULT_BASE_URL = "https://translator.zumu.ai"


class Settings(BaseSettings):
    """SDK settings with validation."""

    # Backend
    api_key: str = Field(..., description="Zumu API key, sent as a bearer token")
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Translator backend URL"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to each backend HTTP call"
    )

    # UI bridge
    server_host: str = Field(default="127.0.0.1")
    server_port: int = Field(default=8020)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    model_config = {
        "env_prefix": "ZUMU_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Client metadata sent with every new session
SDK_VERSION = "1.0.0"
PLATFORM_TAG = "Python"

# Session status values written back to the backend
STATUS_FAILED = "failed"
STATUS_ENDED = "ended"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
