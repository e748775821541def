"""
Application configuration using Pydantic Settings
"""
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "SOFT Projects Management System"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    OFFICE_NAME: str = "City Government of Santa Rosa, Office of the City Mayor"

    # Storage
    # Mode: "database" (SQLAlchemy) or "memory" (process-local, for demos and tests)
    STORAGE_MODE: str = "database"
    DATABASE_URL: str = "sqlite+aiosqlite:///./soft_projects.db"
    DB_ECHO: bool = False
    CODE_RESERVATION_RETRIES: int = Field(default=5, ge=1)

    # Async Tasks
    CELERY_BROKER_URL: str = "redis://localhost:6379/1"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/2"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    CORS_ALLOW_CREDENTIALS: bool = True

    # Observability
    LOG_LEVEL: str = "INFO"

    # Email
    # Backend: "console" (log only) or "smtp"
    EMAIL_BACKEND: str = "console"
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = True
    SMTP_FROM_EMAIL: str = "noreply@santarosacity.gov.ph"
    SMTP_FROM_NAME: str = "SOFT Projects Management Team"
    EMAIL_BULK_DELAY_SECONDS: float = Field(default=0.5, ge=0)

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
