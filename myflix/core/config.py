# myflix/core/config.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # required, no defaults
    SECRET_KEY: str
    DATABASE_URL: str

    # S3 bucket that holds the uploaded images
    BUCKET_NAME: str = ""
    AWS_REGION: str = "us-west-1"

    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 1 week

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    SQL_ECHO: bool = False

    # load from project-root .env and ignore everything else in it
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
