# yardview/core/config.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "Container Yard Viewer API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # Base de datos (bloques configurados)
    DATABASE_URL: str = "sqlite+aiosqlite:///./yardview.db"
    DATABASE_ECHO: bool = False

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    LOG_LEVEL: str = "INFO"

    # Uploads
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024
    PARSE_CACHE_SIZE: int = 8

    # Límites (días) para el histograma de permanencia
    DWELL_BUCKETS: List[int] = [3, 7, 14, 30]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
