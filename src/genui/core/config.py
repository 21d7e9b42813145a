"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Engine settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="GENUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Payload limits
    max_schema_size: int = Field(default=1024 * 1024, gt=0, description="Max serialized schema bytes")
    max_schema_depth: int = Field(default=64, gt=0, description="Max JSON nesting depth")

    # Streaming
    progress_byte_budget: int = Field(
        default=10_000, gt=0, description="Serialized bytes treated as a full stream"
    )
    progress_cap: int = Field(
        default=90, ge=0, le=100, description="Progress ceiling until a stream completes"
    )
    enforce_sequence_order: bool = Field(
        default=True, description="Drop chunks whose sequenceId is not increasing"
    )

    # State
    history_limit: int = Field(default=50, gt=0, description="Max schemas kept in history")

    # Rendering
    renderer_version: str = Field(default="0.1.0", description="Renderer version tag")
    validate_children: bool = Field(
        default=False, description="Validate every child node before rendering it"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
