import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "testing")

from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token, get_password_hash
from app.db.init_db import init_db
from app.db.session import Base, get_db
from app.models.admin import Admin
from app.models.attendance import Attendance
from app.models.contact import Contact
from app.schemas.contact import GenderEnum
from app.utils.datetime_utils import start_of_day, to_naive_utc
from main import app

# Fixed reference instant for every relative-date assertion
NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)

ADMIN_PASSWORD = "admin!123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    admin = Admin(
        name="Admin User",
        email="admin@church.org",
        hashed_password=get_password_hash(ADMIN_PASSWORD),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def auth_headers(admin):
    token = create_access_token(data={"sub": admin.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_contact(db):
    counter = {"n": 0}

    def _make_contact(**overrides):
        counter["n"] += 1
        values = {
            "name": f"Visitor {counter['n']}",
            "gender": GenderEnum.male,
            "phone": f"+25078800{counter['n']:04d}",
            "email": None,
            "evangelist_name": "Grace",
            "first_visit_date": date(2026, 1, 4),
        }
        values.update(overrides)
        contact = Contact(**values)
        db.add(contact)
        db.commit()
        db.refresh(contact)
        return contact

    return _make_contact


@pytest.fixture
def mark(db):
    def _mark(contact, day, attended=True, marked_by="admin@church.org"):
        record = Attendance(
            contact_id=contact.id,
            date=to_naive_utc(start_of_day(day)),
            attended=attended,
            marked_by=marked_by,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    return _mark


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD
