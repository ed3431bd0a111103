"""Application configuration and settings management."""

from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_PLANNER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Waypoint Route Planner API"
    api_prefix: str = "/api"
    max_iterations: int = Field(
        default=100,
        ge=0,
        description="Upper bound on 2-opt improvement passes per optimization call.",
    )
    max_waypoints: int = Field(
        default=50,
        ge=2,
        description="Waypoint count above which the oversize policy applies.",
    )
    oversize_policy: Literal["warn", "reject"] = Field(
        default="warn",
        description="Whether oversized requests are logged and computed, or rejected.",
    )
    invalid_coordinate_policy: Literal["reject", "filter"] = Field(
        default="reject",
        description="Whether malformed waypoints fail the request or are dropped from it.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
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
