# docuquery/settings.py
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="DocuQuery")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    LOG_LEVEL: str = Field(default="INFO")

    # upstream (Gemini generateContent)
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_BASE_URL: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    UPSTREAM_TIMEOUT_SECONDS: Optional[float] = None

    # largest accepted request body, in bytes
    MAX_BODY_BYTES: int = Field(default=2 * 1024 * 1024)

    # client side
    PROXY_URL: str = Field(default="http://localhost:3000/api/generate")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def has_api_key(self) -> bool:
        return bool(self.GEMINI_API_KEY)


def get_settings() -> Settings:
    """Fresh settings on every call, so a key exported after startup is picked up."""
    return Settings()


settings = Settings()
