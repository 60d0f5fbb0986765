from pydantic import BaseModel, EmailStr, constr
from typing import Optional
from datetime import datetime


class SignupRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1)
    email: EmailStr
    password: constr(min_length=6)


class SigninRequest(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    token: str
    token_type: str = "bearer"


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: constr(min_length=6)


class MessageResponse(BaseModel):
    message: str


class IntrospectRequest(BaseModel):
    token: str


class TokenIntrospection(BaseModel):
    active: bool
    admin_id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    scope: Optional[str] = None
    exp: Optional[int] = None


class AdminOut(BaseModel):
    id: int
    name: str
    email: EmailStr
    created_at: datetime

    class Config:
        from_attributes = True
