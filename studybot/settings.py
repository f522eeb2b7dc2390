# studybot/settings.py
import os
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="StudyBot")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    PORT: int = Field(default=10000)
    LOG_LEVEL: str = Field(default="INFO")

    # upstream
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = Field(default="gemini-1.5-flash")
    GEMINI_BASE_URL: str = Field(default="https://generativelanguage.googleapis.com/v1beta/models")
    UPSTREAM_TIMEOUT: float = Field(default=30.0)

    # "gemini" talks to the real API, "echo" answers locally without a key
    AI_CLIENT: str = Field(default="gemini")

    # optional YAML file replacing the packaged generation presets
    GENERATION_CONFIG_PATH: Optional[str] = None

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() in ("prod", "production")

    @property
    def api_key_configured(self) -> bool:
        return bool(self.GEMINI_API_KEY and self.GEMINI_API_KEY.strip())


def get_settings() -> Settings:
    return Settings()
