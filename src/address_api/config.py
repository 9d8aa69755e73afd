"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Nominatim allows roughly one request per second per client.
MIN_GEOCODING_DELAY_SECONDS = 1.1


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ADDR_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Address Distance API"
    api_prefix: str = "/api"

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    addresses_table: str = Field(default="addresses", description="Table holding address records.")

    # Geocoding configuration
    geocoding_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL of the Nominatim-compatible geocoding service.",
    )
    geocoding_user_agent: str = Field(
        default="address-distance-api/0.1",
        description="User-Agent sent to the geocoding service, required by its usage policy.",
    )
    geocoding_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocoding_delay_seconds: float = Field(
        default=MIN_GEOCODING_DELAY_SECONDS,
        ge=MIN_GEOCODING_DELAY_SECONDS,
        description="Pause between the two geocoding calls of a distance request.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("geocoding_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
