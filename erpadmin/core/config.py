from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    # App
    app_name: str = "ERP Admin"
    debug: bool = False

    # CORS
    cors_origins: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Logging
    log_level: str = "INFO"
    log_dir: str = "/var/log/erpadmin"
    log_to_file: bool = False

    # Access guards
    denial_messages: Literal["detailed", "generic"] = "detailed"

    # Identity headers set by the authenticating reverse proxy
    role_header: str = "X-User-Role"
    user_id_header: str = "X-User-Id"
    email_header: str = "X-User-Email"
    permissions_header: str = "X-User-Permissions"

    # Demo mode: unauthenticated requests act as demo_role
    demo_mode: bool = False
    demo_role: str = "viewer"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"  # Allow extra env vars without raising validation errors
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
