from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Core
    APP_NAME: str = "Photoshare"
    APP_SECRET_KEY: str = "change-this-secret"
    LOG_LEVEL: str = "INFO"

    # Auth
    AUTH_SESSION_TTL_SECONDS: int = 86400

    # DB
    DATABASE_URL: str = "sqlite:///./data/photoshare.db"

    # Identifiers
    ID_LENGTH: int = 10
    ID_MAX_ATTEMPTS: int = 16

    # Validation
    USERNAME_MIN_LENGTH: int = 3
    USERNAME_MAX_LENGTH: int = 16
    COMMENT_MAX_LENGTH: int = 2200

    # Uploads
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    ALLOWED_IMAGE_TYPES: list[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]

settings = Settings()
