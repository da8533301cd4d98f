from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class UserBase(BaseModel):
    email: str
    # Stored and compared as plaintext
    password: Optional[str] = None
    role: UserRole = UserRole.USER
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime


class UserRecord(UserBase):
    id: str

    class Config:
        from_attributes = True


class UserOut(BaseModel):
    id: str
    email: str
    role: UserRole
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AdminUserOut(UserOut):
    can_change_role: bool
    can_delete: bool


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    confirm_password: str
    username: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class ProfileUpdate(BaseModel):
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None


class RoleUpdate(BaseModel):
    role: UserRole
