# heritage_recipes/core/config.py
# Environment loading (.env) for the API, the admin scripts and the tests

from __future__ import annotations
from functools import lru_cache
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "change-me-in-production"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MONGO_URI: str = "mongodb://localhost:27017"  # split per prod/staging when needed
    MONGO_DB: str = "heritage_recipes"
    DB_CONNECT_RETRIES: int = 20

    JWT_SECRET: str = DEV_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    BCRYPT_ROUNDS: int = 12

    # "text": Mongo $text index, "regex": token match for stores without a text index
    TEXT_SEARCH_MODE: Literal["text", "regex"] = "text"

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    LOG_LEVEL: str = "INFO"

@lru_cache
def get_settings() -> Settings:
    return Settings()
