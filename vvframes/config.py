"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a VVFRAMES_* environment variable
    - get_settings() is cached (lru_cache) — single instance per process
    - URLs are stored without a trailing slash

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - http_timeout_seconds=None leaves the httpx default timeout in place
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vvframes import __version__


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VVFRAMES_", env_file=".env", case_sensitive=False,
    )

    # Packed archives: {archive_base_url}/{group}.index and {group}.webp
    archive_base_url: str = "https://vv.noxylva.org"

    # Upstream text search
    search_api_url: str = "https://vvapi.cicada000.work/search"
    search_min_ratio: int = 50
    search_min_similarity: float = 0.5
    search_default_count: int = 1
    search_max_count: int = 5

    @field_validator("archive_base_url", "search_api_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # HTTP
    http_timeout_seconds: float | None = None
    user_agent: str = f"vvframes/{__version__}"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
