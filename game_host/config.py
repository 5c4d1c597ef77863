"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), single instance per process
    - asset_root is never empty and is always absolute after validation

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - GAME_HOST_ prefix: the shell process may carry unrelated env vars
    - port = 0 means "ask the port allocator"
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from game_host.core.domain_types import FALLBACK_PORT, ServeMode


class Settings(BaseSettings):
    """Game host settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GAME_HOST_", env_file=".env", case_sensitive=False,
    )

    # Assets
    asset_root: Path = Path("minigame")
    bundle_dir: Path | None = None

    @field_validator("asset_root", mode="before")
    @classmethod
    def require_asset_root(cls, v):
        """Empty roots would serve the working directory."""
        if v is None or str(v).strip() == "":
            raise ValueError("asset_root must not be empty")
        return v

    @field_validator("asset_root", "bundle_dir", mode="after")
    @classmethod
    def make_absolute(cls, v: Path | None) -> Path | None:
        return v.expanduser().absolute() if v is not None else None

    # Server
    host: str = "127.0.0.1"
    port: int = Field(default=0, ge=0, le=65535)
    fallback_port: int = Field(default=FALLBACK_PORT, ge=1, le=65535)
    chunk_size: int = Field(default=64 * 1024, gt=0)
    startup_timeout_seconds: float = Field(default=5.0, gt=0)

    # Shell
    serve_mode: ServeMode = ServeMode.HTTP

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
