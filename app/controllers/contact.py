from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.models.contact import Contact
from app.schemas.contact import (
    ContactCreate,
    ContactDetail,
    ContactFilter,
    ContactOut,
    ContactUpdate,
)
from app.services.stores import apply_contact_filter
from app.utils.datetime_utils import ensure_utc, subtract_months, utc_now
from app.utils.logging_decorator import log_create, log_delete, log_update, log_view


def first_timer_cutoff(now: Optional[datetime] = None) -> datetime:
    """Earliest first visit that still makes a contact a first-timer"""
    return subtract_months(ensure_utc(now or utc_now()), settings.FIRST_TIMER_MONTHS)


def to_contact_out(contact: Contact, now: Optional[datetime] = None) -> ContactOut:
    out = ContactOut.model_validate(contact)
    out.is_first_timer = contact.first_visit_date >= first_timer_cutoff(now).date()
    return out


def _to_contact_list(contacts: List[Contact]) -> List[ContactOut]:
    now = utc_now()
    return [to_contact_out(contact, now) for contact in contacts]


def _get_contact_or_404(db: Session, contact_id: int) -> Contact:
    contact = db.query(Contact).filter(Contact.id == contact_id).first()
    if not contact:
        raise NotFoundError("Contact")
    return contact


@log_create("contacts", "Created new contact")
def create_contact(db: Session, contact_in: ContactCreate) -> ContactOut:
    contact = Contact(**contact_in.model_dump())
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return to_contact_out(contact)


@log_view("contacts", "Viewed contact details")
def get_contact(db: Session, contact_id: int) -> ContactDetail:
    """Contact with its attendance history, newest first"""
    contact = _get_contact_or_404(db, contact_id)
    detail = ContactDetail.model_validate(contact)
    detail.is_first_timer = to_contact_out(contact).is_first_timer
    return detail


@log_view("contacts", "Viewed contact list")
def get_all_contacts(db: Session) -> List[ContactOut]:
    contacts = db.query(Contact).order_by(Contact.created_at.desc(), Contact.id.desc()).all()
    return _to_contact_list(contacts)


@log_update("contacts", "Updated contact")
def update_contact(db: Session, contact_id: int, contact_update: ContactUpdate) -> ContactOut:
    contact = _get_contact_or_404(db, contact_id)

    for field, value in contact_update.model_dump(exclude_unset=True).items():
        setattr(contact, field, value)

    db.commit()
    db.refresh(contact)
    return to_contact_out(contact)


@log_delete("contacts", "Deleted contact")
def delete_contact(db: Session, contact_id: int) -> None:
    contact = _get_contact_or_404(db, contact_id)
    db.delete(contact)
    db.commit()


@log_view("contacts", "Viewed first-timers")
def get_first_timers(db: Session) -> List[ContactOut]:
    cutoff = first_timer_cutoff().date()
    contacts = (
        db.query(Contact)
        .filter(Contact.first_visit_date >= cutoff)
        .order_by(Contact.first_visit_date.desc())
        .all()
    )
    return _to_contact_list(contacts)


@log_view("contacts", "Viewed contacts by evangelist")
def get_contacts_by_evangelist(db: Session, evangelist_name: str) -> List[ContactOut]:
    contacts = db.query(Contact).filter(Contact.evangelist_name == evangelist_name).all()
    return _to_contact_list(contacts)


@log_view("contacts", "Searched contacts")
def search_contacts(db: Session, query: str) -> List[ContactOut]:
    """Case-insensitive match on name, email, phone or evangelist"""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    contacts = (
        db.query(Contact)
        .filter(
            or_(
                Contact.name.ilike(pattern, escape="\\"),
                Contact.email.ilike(pattern, escape="\\"),
                Contact.phone.ilike(pattern, escape="\\"),
                Contact.evangelist_name.ilike(pattern, escape="\\"),
            )
        )
        .order_by(Contact.created_at.desc(), Contact.id.desc())
        .all()
    )
    return _to_contact_list(contacts)


@log_view("contacts", "Filtered contacts")
def filter_contacts(db: Session, contact_filter: ContactFilter) -> List[ContactOut]:
    query = apply_contact_filter(db.query(Contact), contact_filter)
    contacts = query.order_by(Contact.created_at.desc(), Contact.id.desc()).all()
    return _to_contact_list(contacts)
