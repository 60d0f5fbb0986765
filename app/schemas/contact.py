from pydantic import BaseModel, EmailStr, Field
from enum import Enum
from typing import List, Optional
from datetime import date, datetime

from app.schemas.attendance import AttendanceOut
from app.utils.datetime_utils import ensure_utc


class GenderEnum(str, Enum):
    male = "male"
    female = "female"


class DateRange(BaseModel):
    """Time window; start is inclusive, end is inclusive unless inclusive_end is False.

    A missing end leaves the window open towards the future.
    """
    start: datetime
    end: Optional[datetime] = None
    inclusive_end: bool = True

    def contains(self, moment: datetime) -> bool:
        moment = ensure_utc(moment)
        if moment < ensure_utc(self.start):
            return False
        if self.end is None:
            return True
        if self.inclusive_end:
            return moment <= ensure_utc(self.end)
        return moment < ensure_utc(self.end)

    @property
    def is_ordered(self) -> bool:
        return self.end is None or ensure_utc(self.start) <= ensure_utc(self.end)


class ContactFilter(BaseModel):
    """Conjunctive contact filter; an omitted field places no constraint"""
    gender: Optional[GenderEnum] = None
    evangelist: Optional[str] = None
    # Constrains first_visit_date
    date_range: Optional[DateRange] = Field(default=None, alias="dateRange")

    class Config:
        populate_by_name = True


class ContactBase(BaseModel):
    name: str
    gender: GenderEnum
    phone: str
    email: Optional[EmailStr] = None
    evangelist_name: str
    first_visit_date: date


class ContactCreate(ContactBase):
    pass


class ContactUpdate(BaseModel):
    name: Optional[str] = None
    gender: Optional[GenderEnum] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    evangelist_name: Optional[str] = None
    first_visit_date: Optional[date] = None


class ContactOut(ContactBase):
    id: int
    email: Optional[str] = None
    is_first_timer: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContactDetail(ContactOut):
    attendance: List[AttendanceOut] = []


class ContactSearch(BaseModel):
    query: str = Field(..., min_length=1)
