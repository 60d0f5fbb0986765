from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.controllers import admin as admin_controller
from app.core.security import get_current_admin
from app.db.session import get_db
from app.models.admin import Admin
from app.schemas.auth import (
    AdminOut,
    ChangePasswordRequest,
    IntrospectRequest,
    MessageResponse,
    SigninRequest,
    SignupRequest,
    Token,
    TokenIntrospection,
)

router = APIRouter()


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def signup(admin_in: SignupRequest, db: Session = Depends(get_db)):
    return Token(token=admin_controller.signup(db, admin_in))


@router.post("/signin", response_model=Token)
def signin(credentials: SigninRequest, db: Session = Depends(get_db)):
    return Token(token=admin_controller.signin(db, credentials.email, credentials.password))


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    admin_controller.change_password(db, current_admin.id, payload.current_password, payload.new_password)
    return MessageResponse(message="Password changed successfully")


@router.post("/introspect", response_model=TokenIntrospection)
def introspect(
    payload: IntrospectRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return admin_controller.introspect_token(db, payload.token)


@router.get("/me", response_model=AdminOut)
def read_current_admin(current_admin: Admin = Depends(get_current_admin)):
    return current_admin
