"""
Read-side queries the dashboard analytics run against.

The analytics engine only sees the two protocols below; the SQLAlchemy
implementations bind them to one request-scoped Session.
"""

from datetime import time
from typing import Iterable, Optional, Protocol, Set

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from app.core.exceptions import InvalidDateRangeError
from app.models.attendance import Attendance
from app.models.contact import Contact
from app.schemas.contact import ContactFilter, DateRange
from app.utils.datetime_utils import ensure_utc, to_naive_utc


class ContactStore(Protocol):
    def count(self, contact_filter: Optional[ContactFilter] = None) -> int:
        ...


class AttendanceStore(Protocol):
    def count_where(self, date_range: DateRange, attended: Optional[bool] = None) -> int:
        ...

    def distinct_contact_ids(
        self,
        date_range: Optional[DateRange] = None,
        attended: Optional[bool] = None,
        contact_id_in: Optional[Iterable[int]] = None,
    ) -> Set[int]:
        ...


def apply_contact_filter(query: Query, contact_filter: Optional[ContactFilter]) -> Query:
    """Narrow a Contact query by every field set on the filter"""
    if contact_filter is None:
        return query

    if contact_filter.gender is not None:
        query = query.filter(Contact.gender == contact_filter.gender)

    if contact_filter.evangelist:
        query = query.filter(Contact.evangelist_name == contact_filter.evangelist)

    date_range = contact_filter.date_range
    if date_range is not None:
        if not date_range.is_ordered:
            raise InvalidDateRangeError()
        query = query.filter(Contact.first_visit_date >= ensure_utc(date_range.start).date())
        if date_range.end is None:
            return query

        end = ensure_utc(date_range.end)
        end_day = end.date()
        # first_visit_date is a calendar day; an exclusive bound at midnight excludes that day
        if date_range.inclusive_end or end.time() != time.min:
            query = query.filter(Contact.first_visit_date <= end_day)
        else:
            query = query.filter(Contact.first_visit_date < end_day)

    return query


def apply_attendance_range(query: Query, date_range: Optional[DateRange]) -> Query:
    if date_range is None:
        return query
    if not date_range.is_ordered:
        raise InvalidDateRangeError()

    query = query.filter(Attendance.date >= to_naive_utc(date_range.start))
    if date_range.end is None:
        return query
    if date_range.inclusive_end:
        return query.filter(Attendance.date <= to_naive_utc(date_range.end))
    return query.filter(Attendance.date < to_naive_utc(date_range.end))


class SqlContactStore:
    def __init__(self, db: Session):
        self.db = db

    def count(self, contact_filter: Optional[ContactFilter] = None) -> int:
        query = apply_contact_filter(self.db.query(Contact), contact_filter)
        return query.count()


class SqlAttendanceStore:
    def __init__(self, db: Session):
        self.db = db

    def count_where(self, date_range: DateRange, attended: Optional[bool] = None) -> int:
        query = apply_attendance_range(self.db.query(func.count(Attendance.id)), date_range)
        if attended is not None:
            query = query.filter(Attendance.attended == attended)
        return query.scalar() or 0

    def distinct_contact_ids(
        self,
        date_range: Optional[DateRange] = None,
        attended: Optional[bool] = None,
        contact_id_in: Optional[Iterable[int]] = None,
    ) -> Set[int]:
        query = apply_attendance_range(self.db.query(Attendance.contact_id).distinct(), date_range)
        if attended is not None:
            query = query.filter(Attendance.attended == attended)
        if contact_id_in is not None:
            contact_ids = list(contact_id_in)
            if not contact_ids:
                return set()
            query = query.filter(Attendance.contact_id.in_(contact_ids))
        return {contact_id for (contact_id,) in query.all()}
