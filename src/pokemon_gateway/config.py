"""
Configuration settings for Pokemon Gateway.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Pokemon Gateway"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    PORT: int = 8080
    
    # === Upstream (PokeAPI) ===
    POKEAPI_BASE_URL: str = "https://pokeapi.co/api/v2"
    HTTP_TIMEOUT_SEC: int = 5  # per attempt
    
    # === Retry ===
    FETCH_MAX_ATTEMPTS: int = 3
    REQUEST_TIMEOUT_SEC: float = 15.0  # deadline across all attempts and backoff sleeps
    
    # === Cache ===
    POKEMON_CACHE_TTL_SEC: int = 300  # 0 disables caching
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
