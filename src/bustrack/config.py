"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="BUSTRACK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "BusTrack Fleet API"
    api_prefix: str = "/api"
    export_root: Path = Field(default=Path("data/exports"), description="Directory where saved CSV exports are written.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Liveness
    online_threshold_minutes: float = Field(
        default=5.0,
        ge=0.0,
        description="A bus is online while its latest location report is at most this many minutes old.",
    )
    dashboard_bus_limit: int = Field(default=10, ge=1)
    location_history_hours: Optional[float] = Field(
        default=24.0,
        gt=0.0,
        description="Only location rows created or updated within this many hours are read; unset reads all history.",
    )

    # Polling intervals (seconds) per screen
    dashboard_poll_seconds: float = Field(default=30.0, gt=0.0)
    fleet_poll_seconds: float = Field(default=5.0, gt=0.0)
    bus_detail_poll_seconds: float = Field(default=5.0, gt=0.0)
    tracking_poll_seconds: float = Field(default=3.0, gt=0.0)
    portal_poll_seconds: float = Field(default=5.0, gt=0.0)
    feed_autostart: bool = Field(
        default=False,
        description="Start the background tracking feed when the application starts.",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("export_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

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
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        return tuple()

    def poll_interval(self, screen: str) -> float:
        """Return the refresh interval in seconds for a dashboard screen."""
        intervals = {
            "dashboard": self.dashboard_poll_seconds,
            "fleet": self.fleet_poll_seconds,
            "bus_detail": self.bus_detail_poll_seconds,
            "tracking": self.tracking_poll_seconds,
            "portal": self.portal_poll_seconds,
        }
        if screen not in intervals:
            raise ValueError(f"Unknown screen '{screen}'. Expected one of: {', '.join(sorted(intervals))}")
        return intervals[screen]


settings = Settings()
