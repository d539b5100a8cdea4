from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_ENV: str = "production"
    APP_VERSION: str = "1.0.0"
    ALLOWED_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    LOG_LEVEL: str = "INFO"

    MAX_JSON_BODY_BYTES: int = Field(default=1048576, gt=0)
    DEFAULT_ERROR_STATUS: int = Field(default=400, ge=400, le=599)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def max_json_body_kb(self) -> float:
        return round(self.MAX_JSON_BODY_BYTES / 1024, 2)


settings = Settings()
