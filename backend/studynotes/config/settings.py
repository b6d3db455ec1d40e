from pydantic_settings import BaseSettings
from typing import Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "dev-secret-change-in-production"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./studynotes.db"
    # Security
    secret_key: str = DEFAULT_SECRET_KEY
    api_key_encryption_key: Optional[str] = None  # Fernet key; derived from secret_key if None
    bcrypt_rounds: int = 12
    # Sessions
    session_cookie_name: str = "studynotes.sid"
    session_max_age_days: int = 7
    session_cookie_secure: bool = False  # Set to true in production with HTTPS
    session_cookie_samesite: str = "lax"
    # Users
    default_preferred_model: str = "gpt-4"
    # Logging
    log_level: str = "INFO"
    debug: bool = False
    # CORS
    cors_origins: list = ["http://localhost:5173", "http://localhost:3000"]
    # Telemetry: "none" or "console"
    telemetry_exporter: str = "none"

    class Config:
        env_file = ".env"
        case_sensitive = False


def validate_settings(settings: Settings) -> None:
    """Validate required settings"""
    errors = []

    if not settings.database_url:
        errors.append("DATABASE_URL is required")

    if not settings.secret_key:
        errors.append("SECRET_KEY must not be empty")

    if settings.session_max_age_days <= 0:
        errors.append("SESSION_MAX_AGE_DAYS must be positive")

    if settings.session_cookie_samesite.lower() not in ("lax", "strict", "none"):
        errors.append("SESSION_COOKIE_SAMESITE must be one of lax, strict, none")

    if not 4 <= settings.bcrypt_rounds <= 31:
        errors.append("BCRYPT_ROUNDS must be between 4 and 31")

    if settings.telemetry_exporter.lower() not in ("none", "console"):
        errors.append("TELEMETRY_EXPORTER must be 'none' or 'console'")

    if errors:
        error_message = "Configuration errors:\n" + "\n".join(f"  - {error}" for error in errors)
        raise ValueError(error_message)

    if settings.secret_key == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is the development default; set it before deploying")


settings = Settings()
validate_settings(settings)
logger.info("Settings loaded and validated successfully")
