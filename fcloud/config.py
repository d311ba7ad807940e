from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """fCloud configuration, read from the environment and .env"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MONGO_URI: str = "mongodb://localhost:27017/fcloud"
    # Used when MONGO_URI does not name a database
    DATABASE_NAME: str = "fcloud"
    UPLOAD_DIR: Path = Path("uploads")

    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Reflects any origin, credentials allowed
    CORS_ORIGIN_REGEX: str = ".*"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
