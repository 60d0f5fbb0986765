from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.controllers import contact as contact_controller
from app.core.security import get_current_admin
from app.db.session import get_db
from app.schemas.analytics import DashboardAnalytics
from app.schemas.contact import (
    ContactCreate,
    ContactDetail,
    ContactFilter,
    ContactOut,
    ContactSearch,
    ContactUpdate,
)
from app.services.analytics_service import AnalyticsService
from app.utils.datetime_utils import utc_now

# Every contact endpoint requires an authenticated admin
router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.post("/", response_model=ContactOut, status_code=status.HTTP_201_CREATED)
def create_contact(contact_in: ContactCreate, db: Session = Depends(get_db)):
    return contact_controller.create_contact(db, contact_in)


@router.get("/", response_model=List[ContactOut])
def read_contacts(db: Session = Depends(get_db)):
    """All contacts, most recently created first"""
    return contact_controller.get_all_contacts(db)


@router.get("/first-timers", response_model=List[ContactOut])
def read_first_timers(db: Session = Depends(get_db)):
    return contact_controller.get_first_timers(db)


@router.get("/by-evangelist/{evangelist_name}", response_model=List[ContactOut])
def read_contacts_by_evangelist(evangelist_name: str, db: Session = Depends(get_db)):
    return contact_controller.get_contacts_by_evangelist(db, evangelist_name)


@router.post("/search", response_model=List[ContactOut])
def search_contacts(search: ContactSearch, db: Session = Depends(get_db)):
    return contact_controller.search_contacts(db, search.query)


@router.post("/filter", response_model=List[ContactOut])
def filter_contacts(contact_filter: ContactFilter, db: Session = Depends(get_db)):
    return contact_controller.filter_contacts(db, contact_filter)


@router.get("/dashboard/analytics", response_model=DashboardAnalytics)
def read_dashboard_analytics(db: Session = Depends(get_db)):
    """
    Dashboard figures relative to the current UTC time:
    - contact totals and gender split
    - ever-attended and still-attending counts
    - weekly attendance trend and cohort retention
    """
    return AnalyticsService.for_session(db).compute_dashboard_analytics(now=utc_now())


@router.get("/{contact_id}", response_model=ContactDetail)
def read_contact(contact_id: int, db: Session = Depends(get_db)):
    return contact_controller.get_contact(db, contact_id)


@router.put("/{contact_id}", response_model=ContactOut)
def update_contact(contact_id: int, contact_update: ContactUpdate, db: Session = Depends(get_db)):
    return contact_controller.update_contact(db, contact_id, contact_update)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contact(contact_id: int, db: Session = Depends(get_db)):
    contact_controller.delete_contact(db, contact_id)
    return None
