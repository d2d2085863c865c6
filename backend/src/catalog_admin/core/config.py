from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storefront REST API (collaborator)
    CATALOG_API_URL: str = "http://localhost:5050"
    CATALOG_API_TOKEN: str | None = None
    CATALOG_API_TIMEOUT: float = 10.0

    # Redis (draft store)
    REDIS_URL: str = "redis://localhost:6379/0"
    DRAFT_TTL_SECONDS: int = 6 * 3600
    SUBMIT_LOCK_TTL_SECONDS: int = 30

    # Catalog rules
    ENFORCE_UNIQUE_VARIANTS: bool = False
    UNCLASSIFIED_MEDIA_POLICY: Literal["drop", "reject"] = "drop"
    MAX_UPLOAD_BYTES: int = 50 * 1024 * 1024

    # Application
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]


settings = Settings()
