from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.controllers import attendance as attendance_controller
from app.core.security import get_current_admin
from app.db.session import get_db
from app.models.admin import Admin
from app.schemas.attendance import AttendanceCreate, AttendanceOut, AttendanceStats

router = APIRouter()


@router.post("/", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
def mark_attendance(
    attendance_in: AttendanceCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return attendance_controller.mark_attendance(db, attendance_in, current_admin)


@router.get("/", response_model=List[AttendanceOut])
def read_attendance_by_date(
    day: date = Query(..., alias="date", description="Attendance day in YYYY-MM-DD format"),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return attendance_controller.get_attendance_by_date(db, day)


@router.get("/stats/{day}", response_model=AttendanceStats)
def read_attendance_stats(
    day: date,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Present / absent totals for one day"""
    return attendance_controller.get_attendance_stats(db, day)


@router.get("/contact/{contact_id}", response_model=List[AttendanceOut])
def read_attendance_by_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return attendance_controller.get_attendance_by_contact(db, contact_id)


@router.delete("/{attendance_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_attendance(
    attendance_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    attendance_controller.delete_attendance(db, attendance_id)
    return None
