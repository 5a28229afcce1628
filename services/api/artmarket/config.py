from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database - can use either DATABASE_URL or separate params
    database_url: str | None = None

    # Separate DB params (for passwords with special characters)
    db_host: str | None = None
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str | None = None
    db_name: str = "postgres"

    # Auth tokens
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Image hosting (Cloudinary)
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_folder: str = "my_uploads"

    # Geocoding (Geoapify)
    geoapify_api_key: str | None = None

    # Timeout for relay calls to third-party hosts, in seconds
    relay_timeout: float = 30.0

    # CORS - production frontend URL
    frontend_url: str | None = None

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
