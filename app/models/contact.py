from sqlalchemy import Column, Integer, String, Date, Enum
from sqlalchemy.orm import relationship

from app.db.session import Base
from app.core.timestamp_middleware import TimestampMixin
from app.schemas.contact import GenderEnum


class Contact(TimestampMixin, Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    gender = Column(Enum(GenderEnum), nullable=False, index=True)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=True)
    evangelist_name = Column(String, nullable=False, index=True)
    first_visit_date = Column(Date, nullable=False)

    attendance = relationship(
        "Attendance",
        back_populates="contact",
        cascade="all, delete-orphan",
        order_by="Attendance.date.desc()",
    )
