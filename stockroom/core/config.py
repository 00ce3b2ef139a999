from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Stockroom"
    APP_PORT: int = 9210
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./stockroom.db"
    SEED_ON_STARTUP: bool = True

    # Stock summary
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 500
    LOW_STOCK_THRESHOLD: int = 5
    RACK_GROUP_SCOPE: str = "page"  # page, filtered

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def is_memory_db(self) -> bool:
        return self.is_sqlite and (self.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"))

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

@lru_cache()
def get_settings() -> Settings:
    return Settings()
