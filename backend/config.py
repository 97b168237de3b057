# backend/config.py
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(env_path), env_file_encoding="utf-8", extra="ignore")

    # Shared secret for session tokens; JWT_SECRET is accepted for older deployments
    SECRET_KEY: str = Field(
        default="your-secret-key-change-this-in-production",
        validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRET"),
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24
    DATABASE_URL: str = "sqlite:///./comic_store.db"

    FRONTEND_URL: Optional[str] = None
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8080

settings = Settings()
