from datetime import date, datetime
from typing import List

from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateAttendanceError, NotFoundError
from app.models.admin import Admin
from app.models.attendance import Attendance
from app.models.contact import Contact
from app.schemas.attendance import AttendanceCreate, AttendanceStats
from app.utils.datetime_utils import start_of_day, to_naive_utc
from app.utils.logging_decorator import log_create, log_delete, log_view


def _day(value) -> datetime:
    """Naive UTC midnight of the day, the stored form of Attendance.date"""
    return to_naive_utc(start_of_day(value))


@log_create("attendance", "Marked attendance")
def mark_attendance(db: Session, attendance_in: AttendanceCreate, marked_by: Admin) -> Attendance:
    contact = db.query(Contact).filter(Contact.id == attendance_in.contact_id).first()
    if not contact:
        raise NotFoundError("Contact")

    day = _day(attendance_in.date)
    existing = db.query(Attendance).filter(
        Attendance.contact_id == contact.id,
        Attendance.date == day,
    ).first()
    if existing:
        raise DuplicateAttendanceError(contact.id, day)

    record = Attendance(
        contact_id=contact.id,
        date=day,
        attended=attendance_in.attended,
        marked_by=attendance_in.marked_by or marked_by.email,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent mark for the same day
        db.rollback()
        raise DuplicateAttendanceError(contact.id, day)

    db.refresh(record)
    return record


@log_view("attendance", "Viewed attendance by date")
def get_attendance_by_date(db: Session, day: date) -> List[Attendance]:
    return (
        db.query(Attendance)
        .filter(Attendance.date == _day(day))
        .order_by(Attendance.marked_at.desc(), Attendance.id.desc())
        .all()
    )


@log_view("attendance", "Viewed attendance by contact")
def get_attendance_by_contact(db: Session, contact_id: int) -> List[Attendance]:
    return (
        db.query(Attendance)
        .filter(Attendance.contact_id == contact_id)
        .order_by(Attendance.date.desc())
        .all()
    )


@log_delete("attendance", "Deleted attendance record")
def delete_attendance(db: Session, attendance_id: int) -> None:
    record = db.query(Attendance).filter(Attendance.id == attendance_id).first()
    if not record:
        raise NotFoundError("Attendance record")
    db.delete(record)
    db.commit()


@log_view("attendance", "Viewed attendance stats")
def get_attendance_stats(db: Session, day: date) -> AttendanceStats:
    total, present = (
        db.query(
            func.count(Attendance.id),
            func.sum(case((Attendance.attended == True, 1), else_=0)),  # noqa: E712
        )
        .filter(Attendance.date == _day(day))
        .one()
    )
    present = present or 0
    return AttendanceStats(total_attendance=total, present=present, absent=total - present)
