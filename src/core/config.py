"""Configuration Management."""

import os
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Studio settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="STUDIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Model
    gemini_api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""), description="Gemini API key"
    )
    gemini_model: str = Field(default="gemini-2.0-flash-exp", description="Gemini model name")
    gemini_temperature: float = Field(default=0.4, ge=0.0, le=2.0, description="Model temperature")
    gemini_max_tokens: int = Field(default=4096, gt=0, description="Max output tokens")

    # Runtime actions
    api_timeout: float = Field(default=10.0, gt=0, description="apiRequest action timeout")
    api_request_delay: float = Field(
        default=0.0, ge=0.0, description="Artificial latency before apiRequest calls (seconds)"
    )

    # Persistence
    projects_path: str | None = Field(
        default=None, description="JSON file for saved projects (None = in-memory)"
    )

    # Export
    enable_export_cache: bool = Field(default=True, description="Cache generated code")
    export_cache_size: int = Field(default=64, gt=0, description="Export cache max entries")

    # Sync
    sync_channel: str = Field(default="orion_studio_sync", description="Sync channel name")

    # Validation
    max_tree_depth: int = Field(default=32, gt=0, description="Max nesting depth of a tree")
    max_tree_nodes: int = Field(default=5_000, gt=0, description="Max node count of a tree")
    max_payload_size: int = Field(default=2 * 1024 * 1024, gt=0, description="Max sync payload bytes")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
