from __future__ import annotations

from typing import Annotated, List
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load .env file explicitly
ENV_FILE_NAME = ".env"
env_path = Path(__file__).parent.parent.parent / ENV_FILE_NAME
load_dotenv(env_path)


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/translations.db"
    DEFAULT_LOCALE: str = "en"
    DEFAULT_SEPARATOR: str = "."
    AVAILABLE_LOCALES: Annotated[List[str], NoDecode] = []  # empty means any locale is accepted
    DEBUG: bool = False
    LOG_FILE: bool = False

    @field_validator("AVAILABLE_LOCALES", mode="before")
    @classmethod
    def parse_available_locales(cls, v):  # type: ignore
        if v in (None, "", []):
            return []
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        if isinstance(v, (list, tuple)):
            return [str(x) for x in v]
        return []

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
