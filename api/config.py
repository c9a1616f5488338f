"""
API Configuration

Manages environment-based configuration for the API server.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Settings can be overridden with environment variables or .env file.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )
    
    # API Settings
    app_name: str = "Census Generation API"
    app_version: str = "1.0.0"
    debug: bool = False
    
    # CORS Settings
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8080"]
    
    # Generation
    archive_prefix: str = "CensusFiles"
    
    # Logging
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    
    Using lru_cache ensures settings are loaded once and reused.
    """
    return Settings()
