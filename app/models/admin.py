from sqlalchemy import Column, Integer, String, DateTime

from app.db.session import Base
from app.core.timestamp_middleware import utc_now_naive


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=utc_now_naive, nullable=False)
