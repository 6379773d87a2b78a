from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "PromptGlot"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "127.0.0.1"
    PORT: int = 5173

    # External APIs (optional here, checked on first use and by /api/health)
    LINGODOTDEV_API_KEY: Optional[str] = None
    OPENAI_API_KEY: Optional[str] = None
    STABILITY_API_KEY: Optional[str] = None

    LINGO_BASE_URL: str = "https://engine.lingo.dev"
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    STABILITY_BASE_URL: str = "https://api.stability.ai/v2beta"

    OPENAI_CHAT_MODEL: str = "gpt-4o"
    OPENAI_IMAGE_MODEL: str = "dall-e-3"
    STABILITY_OUTPUT_FORMAT: str = "png"

    # Processing Configuration
    PROVIDER_TIMEOUT_SECONDS: float = 60.0
    DEFAULT_STRENGTH: float = 0.8
    MAX_BATCH_TRANSLATIONS: int = 50

    # Upload Limits
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/jpg", "image/png", "image/webp"]
    SUPPORTED_LANGUAGES: List[str] = ["en", "af"]

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
