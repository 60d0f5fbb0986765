import logging

from app.db.session import Base, engine
from app.core.timestamp_middleware import init_timestamp_middleware

# Register every model on Base.metadata before create_all
import app.models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(bind=None):
    init_timestamp_middleware()

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")
