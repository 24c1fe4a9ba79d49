from pydantic import BaseModel, EmailStr, validator

from authapp.schemas.user import UserOut, _check_password, _normalize_email


class TokenOut(BaseModel):
    token: str
    user: UserOut


class TwoFactorLogin(BaseModel):
    two_factor_id: str
    code: str


class TwoFactorCode(BaseModel):
    code: str


class TwoFactorSecret(BaseModel):
    secret: str
    uri: str


class VerifyEmail(BaseModel):
    verification_id: str


class EmailOnly(BaseModel):
    email: EmailStr

    @validator("email")
    def email_lowercase(cls, v):
        return _normalize_email(v)


class ResetPassword(BaseModel):
    change_password_id: str
    password: str

    @validator("password")
    def password_max_bytes(cls, v):
        return _check_password(v)


class Message(BaseModel):
    message: str
