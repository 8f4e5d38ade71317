"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Draft API
    draft_api_base_url: str = "https://draft.premierleague.com/api"
    league_id: int = 29143

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    # Upstream request budget
    request_timeout: float = 10.0  # per HTTP request
    requests_per_second: float = 10.0
    max_concurrent_requests: int = 6  # one per manager in a 6-team league
    manager_timeout: float = 15.0  # per squad fetch, retries included
    render_deadline: float = 45.0  # whole page build

    # Cache TTL in seconds
    cache_ttl_bootstrap: int = 300  # 5 minutes for bootstrap-static

    # League shape
    matchups_per_gameweek: int = 3
    max_gameweek: int = 38
    starting_lineup_size: int = 11

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
