import logging
import logging.config
import os
from typing import Optional

from app.core.env_config import env_manager


def build_logging_config(log_dir: str) -> dict:
    """dictConfig for console output plus rotating info/error/debug files"""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "simple": {
                "format": "%(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "simple",
                "stream": "ext://sys.stdout"
            },
            "file_info": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "formatter": "detailed",
                "filename": os.path.join(log_dir, "app_info.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5
            },
            "file_error": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "ERROR",
                "formatter": "detailed",
                "filename": os.path.join(log_dir, "app_error.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5
            },
            "file_debug": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "detailed",
                "filename": os.path.join(log_dir, "app_debug.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 3
            }
        },
        "loggers": {
            "": {  # Root logger
                "level": "INFO",
                "handlers": ["console", "file_info", "file_error"]
            },
            "app": {  # Application logger
                "level": "DEBUG",
                "handlers": ["console", "file_info", "file_error", "file_debug"],
                "propagate": False
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console", "file_info"],
                "propagate": False
            }
        }
    }


def setup_logging(log_dir: Optional[str] = None, environment: Optional[str] = None):
    """Setup centralized logging configuration for the application"""
    log_dir = log_dir or os.getenv("LOG_DIR", "logs")
    environment = environment or os.getenv("ENVIRONMENT", "development")

    os.makedirs(log_dir, exist_ok=True)
    logging.config.dictConfig(build_logging_config(log_dir))

    if environment != "development":
        logging.getLogger("app").setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info("Logging configuration initialized successfully")
    logger.info(f"Environment: {environment}")
    logger.info(f"Log files will be written to: {os.path.abspath(log_dir)}")
    env_manager.report(logger)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name"""
    return logging.getLogger(name)
