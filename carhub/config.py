"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    DATABASE_URL and JWT_SECRET have no defaults: the app refuses to start
    without them.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(..., min_length=1)

    # JWT
    jwt_secret: str = Field(..., min_length=1)
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=1440)  # 1 day

    # Password hashing
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Uploaded car images
    upload_dir: str = Field(default="uploads")
    max_images: int = Field(default=10, ge=1)

    # Celery
    redis_url: str = Field(default="redis://localhost:6379/0")
    celery_task_always_eager: bool = Field(default=False)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    exit_on_unhandled_error: bool = Field(default=True)
    cors_origins: list[str] = Field(default=["*"])

    @model_validator(mode="after")
    def validate_required_settings(self) -> "Settings":
        """Reject blank secrets and insecure production settings."""
        if not self.jwt_secret.strip():
            raise ValueError("JWT_SECRET must not be blank")
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL must not be blank")
        if self.environment == "production":
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
            if "localhost" in self.database_url:
                raise ValueError("DATABASE_URL should not use localhost in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
