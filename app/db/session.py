from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from app.core.config import settings

# SQLite needs cross-thread access under the threaded FastAPI worker pool
connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

# SQLAlchemy DB engine
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

# Create session local class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()

def get_db():
    """Yield a DB session and close it after use."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
