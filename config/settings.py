# config/settings.py

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import os
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Stress Congress 2026"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")

    # CORS
    CORS_ORIGINS: str = ""

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if not self.CORS_ORIGINS:
            return ["*"] if self.DEBUG else []
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    # Database
    DATABASE_URL: str = "sqlite:///./stress_congress.db"
    DB_POOL_SIZE: int = Field(default=20, ge=5, le=100)
    DB_MAX_OVERFLOW: int = Field(default=30, ge=5, le=100)
    DB_POOL_RECYCLE: int = Field(default=3600, ge=300)

    # Security
    SECRET_KEY: str = Field(default="stress-congress-2026-secret-key", min_length=8)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = Field(default=24 * 7, ge=1, le=24 * 30)

    # Event
    EVENT_PREFIX: str = Field(default="SC2026", min_length=1, max_length=32)
    SEED_ON_STARTUP: bool = False
    RECENT_CHECK_INS_DEFAULT_LIMIT: int = Field(default=10, ge=1, le=100)

    # Scanner client
    SCANNER_API_URL: str = "http://localhost:8000/api"
    SCANNER_TOKEN: Optional[str] = None
    SCANNER_SUCCESS_RESET_SECONDS: float = Field(default=3.0, gt=0)
    SCANNER_NOTICE_RESET_SECONDS: float = Field(default=2.5, gt=0)
    SCANNER_REQUEST_TIMEOUT: int = Field(default=10, ge=1, le=120)

    # Monitoring
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Server
    PORT: Optional[int] = Field(default=8000, ge=1, le=65535)

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret(cls, v):
        """Ensure the signing secret is strong enough"""
        if len(v) < 32:
            import warnings
            warnings.warn(f"Secret key is only {len(v)} characters. Consider using at least 32 characters for production.", UserWarning)
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v):
        """Validate database URL format"""
        if not v.startswith(("postgresql://", "postgresql+psycopg2://", "postgresql+psycopg://", "sqlite://")):
            raise ValueError("Unsupported database URL format")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v):
        """Validate CORS origins in production"""
        environment = os.getenv("ENVIRONMENT", "development")
        if environment == "production" and ("*" in v or not v):
            raise ValueError("Wildcard CORS origins not allowed in production")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
