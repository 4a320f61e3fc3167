from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="COURSEGRAPH_",
        extra="ignore",
    )

    environment: str = "development"
    # Loaded once at startup when set, e.g. "infile.txt"
    catalog_path: str | None = None
    duplicate_policy: Literal["overwrite", "reject"] = "overwrite"
    max_id_length: int = Field(20, ge=5, le=20)
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"
    cors_origins: list[str] = ["*"]
    max_upload_bytes: int = 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
