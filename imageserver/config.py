#config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
    # Application Settings
    APP_NAME: str = "Image Server API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True  # Can disable in production

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 8000))
    API_PREFIX: str = "/api"

    # Database Settings
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "sqlite:///./imageserver.db")
    STORE_BACKEND: str = "sql"  # 'sql' or 'memory'

    # CORS Settings (accept comma-separated strings to avoid JSON parsing in env)
    ALLOWED_ORIGINS: str = os.environ.get("ALLOWED_ORIGINS", "*")

    # File Upload Settings
    MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB
    MAX_FILES_PER_REQUEST: int = 10
    ALLOWED_IMAGE_TYPES: List[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/bmp",
        "image/webp",
    ]

    # Scaling Settings
    MAX_SCALE_DIMENSION: int = 4096
    JPEG_QUALITY: int = 85

    # Default image served when a lookup misses
    DEFAULT_IMAGE_PATH: Optional[str] = None
    DEFAULT_IMAGE_WIDTH: int = 256
    DEFAULT_IMAGE_HEIGHT: int = 256
    DEFAULT_IMAGE_COLOR: str = "#c8c8c8"

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Accept comma-separated strings for list envs in addition to JSON arrays
    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

    @property
    def max_request_size(self) -> int:
        # Multipart overhead aside, a batch can carry MAX_FILES_PER_REQUEST full-size files
        return self.MAX_FILE_SIZE * self.MAX_FILES_PER_REQUEST


@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings: Settings = get_settings()
