from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AttendanceCreate(BaseModel):
    contact_id: int
    # Time of day is discarded; the record is filed under the UTC day
    date: datetime
    attended: bool
    marked_by: Optional[str] = None


class AttendanceOut(BaseModel):
    id: int
    contact_id: int
    date: datetime
    attended: bool
    marked_by: str
    marked_at: datetime

    class Config:
        from_attributes = True


class AttendanceStats(BaseModel):
    total_attendance: int
    present: int
    absent: int
