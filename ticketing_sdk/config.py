"""
Configuration settings for the Ticketing SDK.
"""
from typing import Literal
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    SDK configuration loaded from environment variables (TICKETING_*).
    """
    model_config = ConfigDict(
        env_prefix="TICKETING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # API settings
    base_url: str = "http://localhost:8080"
    api_key: str = ""
    environment: Literal["development", "staging", "production"] = "development"
    timeout: float = 30.0  # seconds

    # Stream settings
    stream_path: str = "/api/v1/events/stream"
    stream_connect_timeout: float = 10.0  # seconds
    stream_max_queue_size: int = 1000


# Global settings instance
settings = Settings()
