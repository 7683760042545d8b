"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "CollegeEZNow"

    # Atlas credentials (take precedence over mongodb_uri when both are set)
    db_user: Optional[str] = None
    db_pass: Optional[str] = None
    db_cluster: str = "cluster0.18ceobk.mongodb.net"

    # Upper bound for server selection, connect and socket waits
    mongo_timeout_ms: int = 5000

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: str = "*"

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def mongo_url(self) -> str:
        """Construct the MongoDB connection URL"""
        if self.db_user and self.db_pass:
            return (
                f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
                f"@{self.db_cluster}/?retryWrites=true&w=majority"
            )
        return self.mongodb_uri

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
