from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # RDW open data (Socrata) endpoint for registered vehicles
    RDW_API_URL: str = Field(
        default="https://opendata.rdw.nl/resource/m9d7-ebf2.json",
        description="Base URL of the RDW 'Gekentekende voertuigen' dataset.",
    )
    RDW_TIMEOUT_S: float = Field(default=10.0, description="Timeout per RDW request, in seconds.")
    RDW_SEARCH_LIMIT: int = Field(default=100, description="Maximum rows returned by a pattern search.")

    LOG_LEVEL: str = Field(default="INFO", description="Root log level.")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
