from pydantic_settings import BaseSettings
from typing import List

# Loads the .env chain before Settings reads the environment
from app.core.env_config import env_manager

DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./church_admin.db"
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    ENVIRONMENT: str = "development"
    FRONTEND_URL: str = "http://localhost:8080"

    # Derived from FRONTEND_URL when left empty
    CORS_ORIGINS: List[str] = []

    # Contact / dashboard windows
    FIRST_TIMER_MONTHS: int = 1
    STILL_ATTENDING_DAYS: int = 35
    TREND_WEEKS: int = 10
    RETENTION_WEEKS: int = 5

    class Config:
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        if not self.CORS_ORIGINS:
            self.CORS_ORIGINS = env_manager.get_cors_origins(self.FRONTEND_URL)

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
