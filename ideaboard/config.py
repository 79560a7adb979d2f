from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Token signing; must be set, the app refuses to start without it
    JWT_SECRET: str = ""

    DATABASE_URL: str = "sqlite:///./ideaboard.db"
    DB_SYNC: bool = True

    # Default administrator created on first boot
    SEED_ADMIN: bool = True
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    CORS_ORIGINS: list[str] = ["*"]

    APP_TITLE: str = "Idea Board"
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
