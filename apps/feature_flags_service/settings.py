from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "feature-flags-service"
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: str = "*"  # comma separated

    # Storage
    database_url: str = "sqlite+aiosqlite:///./flags.db"
    cache_ttl_s: int = 60  # 0 disables the read cache

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(env_prefix="FF_")

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
