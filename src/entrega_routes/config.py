"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ROUTE_STYLES: dict[str, tuple[str, str]] = {
    "Marcos": ("blue-500", "#3B82F6"),
    "Uene": ("red-500", "#EF4444"),
    "Leo": ("emerald-500", "#10B981"),
}


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ENTREGA_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Entrega Route Service"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for report exports.")
    allowed_couriers: tuple[str, ...] = Field(
        default=("Marcos", "Uene", "Leo"),
        description="Courier eligibility names that get a route drawn on the map.",
    )
    debounce_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Settling delay before recomputing routes after a pushed update.",
    )
    route_styles: dict[str, tuple[str, str]] = Field(
        default_factory=lambda: dict(DEFAULT_ROUTE_STYLES),
        description="Courier name -> (style key, hex colour) used for route overlays.",
    )
    default_route_style: tuple[str, str] = Field(default=("slate-500", "#64748B"))
    route_opacity: float = Field(default=0.4, ge=0.0, le=1.0)
    route_weight: int = Field(default=4, ge=1)
    report_limit: int = Field(default=100, ge=1, description="Most recent deliveries considered by reports.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "allowed_couriers", mode="before")
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

    @field_validator("route_styles", mode="before")
    @classmethod
    def _parse_route_styles(cls, value: Any) -> dict[str, tuple[str, str]]:
        """Accept a JSON object of ``name -> [style_key, color]`` from the environment."""
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError(f"route_styles must be a JSON object: {exc}") from exc
        if not isinstance(value, dict):
            raise ValueError("route_styles must be a mapping of courier name to [style_key, color].")
        return {str(name): (str(style[0]), str(style[1])) for name, style in value.items()}


settings = Settings()
