from __future__ import annotations

import os
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    APP_NAME: str = "EchoSoul API"
    ENV: str = Field(default=os.getenv("ENV", "local"))
    DEBUG: bool = Field(default=os.getenv("DEBUG", "false").lower() == "true")
    LOG_FORMAT: str = Field(default=os.getenv("LOG_FORMAT", "console"))  # "console" | "json"
    ENGINE_LOG_LEVEL: str = Field(default=os.getenv("ENGINE_LOG_LEVEL", ""))  # empty: follow DEBUG

    # HTTP
    ALLOWED_ORIGINS: str = Field(default=os.getenv("ALLOWED_ORIGINS", ""))  # comma separated
    DEV_BYPASS_AUTH: bool = Field(default=os.getenv("DEV_BYPASS_AUTH", "false").lower() in {"1", "true", "yes"})

    # Personality engine
    STYLE_BLEND_FACTOR: float = Field(default=float(os.getenv("STYLE_BLEND_FACTOR", "0.25")), ge=0.0, le=1.0)

    class Config:
        env_file = (".env.backend", ".env.local", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Cached Settings instance. Call anywhere.
    """
    return Settings()
