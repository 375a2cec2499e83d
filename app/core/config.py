"""
Obras ERP - Configuration
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import secrets
from pathlib import Path
from dotenv import load_dotenv

# Carrega .env da raiz do projeto (sobrescreve variaveis do sistema)
env_file = Path(__file__).parent.parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file, override=True)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Obras ERP"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Database (accepts DATABASE_URL or OBRAS_DATABASE_URL)
    DATABASE_URL: Optional[str] = None
    OBRAS_DATABASE_URL: str = "sqlite+aiosqlite:///./obras.db"

    @property
    def db_url(self) -> str:
        """Returns DATABASE_URL if set, otherwise OBRAS_DATABASE_URL"""
        return self.DATABASE_URL or self.OBRAS_DATABASE_URL

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Verificacao de email no cadastro
    EMAIL_VERIFICATION_REQUIRED: bool = True
    EMAIL_VERIFICATION_EXPIRE_HOURS: int = 24
    FRONTEND_URL: str = "http://localhost:5173"

    # CORS
    CORS_ORIGINS: list = [
        "http://localhost:8080",
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "5/15minutes"
    REGISTER_RATE_LIMIT: str = "3/hour"

    # Email Settings (SMTP)
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_FROM_EMAIL: str = "noreply@obras-erp.com"
    SMTP_FROM_NAME: str = "Obras ERP"
    SMTP_TLS: bool = True
    SMTP_SSL: bool = False

    # Notificacao de erros criticos
    ERROR_NOTIFICATION_ENABLED: bool = False
    ERROR_NOTIFICATION_EMAIL: str = "suporte@obras-erp.com"

    # Job de lancamentos atrasados
    OVERDUE_SCHEDULER_ENABLED: bool = False
    OVERDUE_SCHEDULER_INTERVAL_SECONDS: int = 3600

    # Activity log
    ACTIVITY_LOG_LIMIT: int = 1000

    class Config:
        extra = "ignore"
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
