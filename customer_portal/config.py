"""Configuration management using Pydantic Settings"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage (relative paths resolve against the process working directory)
    data_dir: Path = Path("data")
    collection_locking: bool = True

    # Service
    service_name: str = "customer-portal"
    log_level: str = "INFO"
    cors_origins: List[str] = [
        "http://localhost:5000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # HTTP Client
    portal_api_base: str = "http://localhost:8000"
    http_timeout_seconds: float = 5.0


settings = Settings()
