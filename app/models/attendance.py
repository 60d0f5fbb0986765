from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.session import Base
from app.core.timestamp_middleware import utc_now_naive


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("contact_id", "date", name="uq_attendance_contact_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    contact_id = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
    # UTC midnight of the attendance day
    date = Column(DateTime, nullable=False, index=True)
    attended = Column(Boolean, nullable=False)
    marked_by = Column(String, nullable=False)
    marked_at = Column(DateTime, default=utc_now_naive, nullable=False)

    contact = relationship("Contact", back_populates="attendance")
