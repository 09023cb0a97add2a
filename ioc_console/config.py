"""IoC Console configuration system using Pydantic Settings."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "CHANGE_ME_IN_PRODUCTION"


class IoCConsoleConfig(BaseSettings):
    """Main configuration class. Loads from .env file and environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "IoC Console"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: str = "http://localhost:3000"

    # Sessions
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    session_expiry_minutes: int = 24 * 60
    enforce_session_expiry: bool = True
    session_token_key: str = "ioc_console_token"
    bcrypt_rounds: int = 12

    # Repository
    simulate_latency: bool = True
    seed_demo_data: bool = True

    # Dashboard
    dashboard_refresh_seconds: int = 300  # 5 minutes

    # Export
    export_filename_prefix: str = "fortigate_iocs"

    # Logging
    log_format: str = "auto"  # auto: console in debug, JSON otherwise
    log_dir: str = "logs"
    log_file: str = "ioc_console.log"
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        allowed = {"HS256", "HS384", "HS512"}
        if v not in allowed:
            raise ValueError(f"jwt_algorithm must be one of {allowed}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"auto", "json", "console"}
        if v not in allowed:
            raise ValueError(f"log_format must be one of {allowed}")
        return v

    @field_validator("dashboard_refresh_seconds", "session_expiry_minutes")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive number")
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v


def get_config() -> IoCConsoleConfig:
    """Factory function to create config instance."""
    return IoCConsoleConfig()
