from typing import List, Optional

from pydantic import BaseModel, validator, EmailStr

from authapp.utils.auth import password_too_long


def _check_password(v: str) -> str:
    """Ensure password does not exceed bcrypt's 72-byte limit when UTF-8 encoded.

    Raise a validation error so API returns a 422 with a clear message.
    """
    if not v:
        raise ValueError("password cannot be empty")
    if password_too_long(v):
        raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return v


def _normalize_email(v):
    return v.strip().lower() if v else v


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    first_name: str = ""
    last_name: str = ""

    @validator("email")
    def email_lowercase(cls, v):
        return _normalize_email(v)

    @validator("password")
    def password_max_bytes(cls, v):
        return _check_password(v)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @validator("email")
    def email_lowercase(cls, v):
        return _normalize_email(v)


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @validator("email")
    def email_lowercase(cls, v):
        return _normalize_email(v)


class ChangePassword(BaseModel):
    current_password: str
    password: str

    @validator("password")
    def password_max_bytes(cls, v):
        return _check_password(v)


class UserOut(BaseModel):
    id: int
    email: EmailStr
    first_name: str = ""
    last_name: str = ""
    verified: bool = False
    two_factor_enabled: bool = False
    roles: List[str] = []

    class Config:
        from_attributes = True
