"""
.env loading for the church admin API.

Files are read most specific first and never override variables that are
already set in the process environment. Nothing is logged at import time,
because logging is not configured yet; `setup_logging` calls `report()`.
"""

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Settings has a fallback for each of these, but production should set them
REQUIRED_VARS = ("DATABASE_URL", "SECRET_KEY")

LOCAL_FRONTEND_ORIGINS = (
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)


def env_file_chain(environment: str) -> List[str]:
    return [f".env.{environment}", ".env.local", ".env"]


class EnvConfigManager:
    def __init__(self, environment: Optional[str] = None, base_dir: Optional[str] = None):
        self.environment = environment or os.getenv("ENVIRONMENT", "development")
        self.base_dir = base_dir or os.getcwd()
        self.loaded_files: List[str] = []
        self.missing_vars: List[str] = []

    def load(self) -> "EnvConfigManager":
        for name in env_file_chain(self.environment):
            path = os.path.join(self.base_dir, name)
            if os.path.exists(path):
                load_dotenv(path, override=False)
                self.loaded_files.append(name)

        self.missing_vars = [var for var in REQUIRED_VARS if not os.getenv(var)]
        return self

    def report(self, log: logging.Logger = logger) -> None:
        if self.loaded_files:
            log.info(f"Configuration loaded from: {', '.join(self.loaded_files)}")
        else:
            log.warning("No .env files found, using the process environment only")

        if self.missing_vars:
            log.warning(f"Not set, using built-in defaults: {', '.join(self.missing_vars)}")

    @staticmethod
    def get_cors_origins(frontend_url: str) -> List[str]:
        """The frontend URL, plus the usual dev-server ports when it is local"""
        origins = [frontend_url]
        if "localhost" in frontend_url or "127.0.0.1" in frontend_url:
            origins.extend(LOCAL_FRONTEND_ORIGINS)
        return list(dict.fromkeys(origins))


env_manager = EnvConfigManager().load()
