from typing import Optional, Tuple
from pydantic import computed_field, ConfigDict
from pydantic_settings import BaseSettings


class ProjectSettings(BaseSettings):

    # === Database ===
    DB_HOST: Optional[str] = "localhost"
    DB_PORT: int = 5432
    DB_USER: Optional[str] = "postgres"
    DB_PASS: Optional[str] = "postgres"
    DB_NAME: Optional[str] = "billing"
    CREATE_DB: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # === Language ===
    DEFAULT_LANGUAGE: str = 'en'
    SUPPORTED_LANGUAGES: Tuple[str, ...] = ('en', 'fr')

    # === Activity log ===
    ACTIVITY_PAGE_SIZE: int = 30
    ACTIVITY_MAX_PAGE_SIZE: int = 500

    # === Static assets ===
    ASSETS_ENTRY_NAME: str = "fossbilling"
    ASSETS_PUBLIC_PREFIX: str = "/themes/admin_default/build"

    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True
    FASTAPI_RUN_PORT: int = 8000
    API_VERSION: Optional[str] = "1.0"
    CORS_ALLOWED_ORIGINS: Optional[str] = None

    @computed_field
    @property
    def DATABASE_URL(self) -> str:
        return f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    model_config = ConfigDict(
            env_file=".env",
            env_file_encoding="utf-8",
            extra="ignore",  # ignore unknown fields instead of raising an error
            )


settings = ProjectSettings()
