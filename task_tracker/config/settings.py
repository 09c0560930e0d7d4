"""Application settings using Pydantic."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TASK_TRACKER_",
        extra="ignore",
    )

    debug: bool = Field(default=False)
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")
    # Seconds to wait for the task store lock before failing
    lock_timeout: float = Field(default=5.0, gt=0)
    # Comma-separated list of allowed CORS origins
    cors_origins: str = Field(default="")
    # Server the CLI talks to; defaults to http://<host>:<port>
    server_url: Optional[str] = Field(default=None)
    # Seconds the CLI waits for a server response
    client_timeout: float = Field(default=10.0, gt=0)

    def get_cors_origins(self) -> list[str]:
        """Get list of allowed CORS origins."""
        if not self.cors_origins:
            return []
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_server_url(self) -> str:
        """Get the base URL of the task server."""
        if self.server_url:
            return self.server_url.rstrip("/")
        # A wildcard bind address is not something a client can connect to
        host = "127.0.0.1" if self.host in ("0.0.0.0", "") else self.host
        return f"http://{host}:{self.port}"


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
