from typing import Optional
import logging

from jose import JWTError
from sqlalchemy.orm import Session

from app.core import security
from app.core.exceptions import (
    AdminExistsError,
    AdminNotFoundError,
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordMismatchError,
)
from app.models.admin import Admin
from app.schemas.auth import SignupRequest, TokenIntrospection

logger = logging.getLogger(__name__)


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    return db.query(Admin).filter(Admin.email == email.lower()).first()


def issue_token(admin: Admin) -> str:
    return security.create_access_token(data={"sub": admin.email})


def signup(db: Session, admin_in: SignupRequest) -> str:
    """Create an admin account and return its first access token"""
    email = admin_in.email.lower()
    logger.info(f"Starting admin signup for {email}")

    if get_admin_by_email(db, email):
        logger.warning(f"Admin signup failed - email already exists: {email}")
        raise AdminExistsError(email)

    admin = Admin(
        name=admin_in.name,
        email=email,
        hashed_password=security.get_password_hash(admin_in.password),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info(f"Admin created successfully: {admin.id}")
    return issue_token(admin)


def signin(db: Session, email: str, password: str) -> str:
    logger.info(f"Starting admin signin for {email}")

    admin = get_admin_by_email(db, email)
    if not admin:
        logger.warning(f"Admin signin failed - email not found: {email}")
        raise InvalidCredentialsError()

    if not security.verify_password(password, admin.hashed_password):
        logger.warning(f"Admin signin failed - invalid password: {email}")
        raise InvalidCredentialsError()

    logger.info(f"Admin signin successful: {admin.id}")
    return issue_token(admin)


def change_password(db: Session, admin_id: int, current_password: str, new_password: str) -> None:
    logger.info(f"Starting password change for admin {admin_id}")

    admin = db.query(Admin).filter(Admin.id == admin_id).first()
    if not admin:
        logger.warning(f"Password change failed - admin not found: {admin_id}")
        raise AdminNotFoundError(admin_id)

    if not security.verify_password(current_password, admin.hashed_password):
        logger.warning(f"Password change failed - invalid current password: {admin_id}")
        raise PasswordMismatchError()

    admin.hashed_password = security.get_password_hash(new_password)
    db.commit()
    logger.info(f"Password changed successfully for admin {admin_id}")


def introspect_token(db: Session, token: str) -> TokenIntrospection:
    """Describe a token; raises InvalidTokenError when it is not usable"""
    try:
        payload = security.decode_access_token(token)
    except JWTError as e:
        logger.warning(f"Token introspection failed: {e}")
        raise InvalidTokenError()

    admin = get_admin_by_email(db, payload["sub"])
    if not admin:
        logger.warning(f"Token introspection failed - admin not found: {payload['sub']}")
        raise InvalidTokenError()

    return TokenIntrospection(
        active=True,
        admin_id=admin.id,
        name=admin.name,
        email=admin.email,
        scope="admin",
        exp=payload.get("exp"),
    )
