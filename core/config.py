"""
Application configuration loaded from environment variables.
Uses pydantic-settings with python-dotenv for .env file loading.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env file.

    Priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values
    """

    # Database configuration
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_DATABASE: str = "restaurant_db"
    DB_CHARSET: str = "utf8mb4"
    DB_URL: Optional[str] = None  # Full SQLAlchemy URL, overrides the DB_* fields

    # Yelp Fusion configuration
    YELP_API_KEY: str = ""
    YELP_API_HOST: str = "https://api.yelp.com"
    YELP_SEARCH_PATH: str = "/v3/businesses/search"
    YELP_SEARCH_TERM: str = "restaurants"
    YELP_SEARCH_LIMIT: int = 20
    YELP_TIMEOUT: float = 10.0

    # Recommendation configuration
    MAX_RECOMMENDED: int = 10
    CATEGORY_EXACT_MATCH: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # API configuration
    API_PREFIX: str = ""
    DEBUG: bool = False

    # Server configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    @property
    def DATABASE_URL(self) -> str:
        """Construct database URL for SQLAlchemy (MySQL unless DB_URL is set)."""
        if self.DB_URL:
            return self.DB_URL
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_DATABASE}"
            f"?charset={self.DB_CHARSET}"
        )

    def validate_yelp_key(self) -> bool:
        """Check if Yelp API key is configured."""
        return bool(self.YELP_API_KEY and self.YELP_API_KEY.strip())

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra fields in .env
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance for easy import
settings = get_settings()
