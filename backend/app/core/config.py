# backend/app/core/config.py

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./dashboard.db"

    # Put this on the host as JWT_SECRET_KEY
    jwt_secret_key: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    max_login_attempts: int = 5
    lock_minutes: int = 30

    # Comma-separated allowlist, e.g. "https://dash.example.com,http://localhost:4200"
    cors_origins: str = ""
    frontend_url: str = "http://localhost:4200"

    seed_endpoint_enabled: bool = True
    seed_on_startup: bool = False

    simulator_enabled: bool = True
    simulator_interval_seconds: float = 10.0
    simulator_notification_chance: float = 0.3

    broadcast_send_timeout_seconds: float = 5.0

    notifications_limit: int = 20
    activities_limit: int = 10

    @property
    def allow_origins(self) -> list[str]:
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        if origins:
            return origins
        return sorted({self.frontend_url.strip(), "http://localhost:4200"})


@lru_cache
def get_settings() -> Settings:
    return Settings()
