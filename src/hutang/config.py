from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    settle_epsilon: Decimal = Field(Decimal("0.01"), alias="SETTLE_EPSILON", gt=0)
    activity_log_size: int = Field(50, alias="ACTIVITY_LOG_SIZE", ge=1)
    log_level: str = Field("INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
