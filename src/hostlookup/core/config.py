"""Centralized configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Resolver configuration
    nameservers: str = ""  # Space-separated list of nameserver IPs
    resolv_conf: str = "/etc/resolv.conf"
    dns_port: int = 53
    dns_timeout: float = 2.0
    dns_lifetime: float = 5.0
    dns_use_tcp: bool = False
    dns_use_search: bool = False

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    server_log_level: str = "warning"

    # Logging
    log_level: str = "INFO"

    # Sentry configuration (optional)
    sentry_dsn: Optional[str] = None
    sentry_environment: str = "production"
    sentry_traces_sample_rate: float = 1.0

    @property
    def nameservers_list(self) -> list[str]:
        """Return configured nameservers as a list."""
        return self.nameservers.split()

    @property
    def use_system_config(self) -> bool:
        """Check if nameservers come from the system resolver config."""
        return not self.nameservers_list

    @property
    def sentry_enabled(self) -> bool:
        """Check if Sentry is configured."""
        return bool(self.sentry_dsn)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
