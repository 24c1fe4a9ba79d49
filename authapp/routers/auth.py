import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy import func
from sqlalchemy.orm import Session

import authapp.config as cfg
from authapp.schemas.user import UserCreate, UserOut, LoginRequest
from authapp.schemas.auth import (
    TokenOut, TwoFactorLogin, VerifyEmail, EmailOnly, ResetPassword, Message,
)
from authapp.models.user import User
from authapp.models import action_token
from authapp.utils import action_tokens, two_factor
from authapp.utils.auth import (
    hash_password, verify_password, create_user_token, register_user, language_data,
)
from authapp.utils.email import email_service
from authapp.utils.profile import user_out
from authapp.database import get_db
from authapp.language import get

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

# FusionAuth-style non-standard login statuses
EMAIL_NOT_VERIFIED = 212
TWO_FACTOR_REQUIRED = 242
INVALID_TWO_FACTOR_CODE = 421


def send_verification(db: Session, user: User):
    verification_id = action_tokens.issue(db, user, action_token.VERIFY, cfg.VERIFY_TOKEN_EXPIRE_MINUTES)
    email_service.send_verification(user.email, verification_id)


def _logged_in(user: User):
    return {"token": create_user_token(user), "user": user_out(user)}


@router.post("/signup", response_model=UserOut)
def signup(user: UserCreate, db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    exists = db.query(User).filter(func.lower(User.email) == user.email).first()
    if exists:
        raise HTTPException(status_code=400, detail=get(lang, "common.auth.emailExists"))

    new_user = User(email=user.email, password=hash_password(user.password), first_name=user.first_name, last_name=user.last_name)
    db.add(new_user)
    register_user(db, new_user, cfg.DEFAULT_ROLES)
    db.commit()
    db.refresh(new_user)
    logger.info("signed up user %s", new_user.id)

    send_verification(db, new_user)
    return user_out(new_user)


@router.post("/login", response_model=TokenOut, responses={
    EMAIL_NOT_VERIFIED: {"description": "Email address not verified"},
    TWO_FACTOR_REQUIRED: {"description": "Two-factor code required"},
})
def login(user: LoginRequest, db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    db_user = db.query(User).filter(func.lower(User.email) == user.email).first()
    if not db_user or not verify_password(user.password, db_user.password):
        logger.info("failed login for %s", user.email)
        raise HTTPException(status_code=401, detail=get(lang, "common.auth.invalidCredentials"))

    if not db_user.verified:
        return JSONResponse(status_code=EMAIL_NOT_VERIFIED, content={
            "message": get(lang, "common.auth.notVerified"),
            "email": db_user.email,
        })

    if db_user.two_factor_enabled:
        two_factor_id = action_tokens.issue(db, db_user, action_token.TWO_FACTOR, cfg.TWO_FACTOR_TOKEN_EXPIRE_MINUTES)
        return JSONResponse(status_code=TWO_FACTOR_REQUIRED, content={
            "message": get(lang, "common.auth.twoFactorRequired"),
            "two_factor_id": two_factor_id,
        })

    return _logged_in(db_user)


@router.post("/twoFactor", response_model=TokenOut, responses={
    INVALID_TWO_FACTOR_CODE: {"description": "Invalid two-factor code"},
})
def two_factor_login(body: TwoFactorLogin, db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    row = action_tokens.lookup(db, body.two_factor_id, action_token.TWO_FACTOR)
    if not row:
        raise HTTPException(status_code=404, detail=get(lang, "common.auth.twoFactorExpired"))

    db_user = db.get(User, row.user_id)
    step = two_factor.accepted_step(db_user.two_factor_secret, body.code, db_user.two_factor_last_step)
    if step is None:
        row.attempts += 1
        if row.attempts >= cfg.TWO_FACTOR_MAX_ATTEMPTS:
            logger.warning("two-factor id for user %s revoked after %s wrong codes", db_user.id, row.attempts)
            db.delete(row)
        db.commit()
        return JSONResponse(status_code=INVALID_TWO_FACTOR_CODE, content={
            "message": get(lang, "common.auth.invalidCode"),
        })

    db_user.two_factor_last_step = step
    db.delete(row)
    db.commit()
    return _logged_in(db_user)


@router.post("/verifyEmail", response_model=Message)
def verify_email(body: VerifyEmail, db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    db_user = action_tokens.consume(db, body.verification_id, action_token.VERIFY)
    if not db_user:
        raise HTTPException(status_code=404, detail=get(lang, "common.auth.verificationInvalid"))
    db_user.verified = True
    db.commit()
    logger.info("verified email for user %s", db_user.id)
    return {"message": get(lang, "common.auth.emailVerified")}


@router.post("/resendVerification", response_model=Message)
def resend_verification(body: EmailOnly, db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    db_user = db.query(User).filter(func.lower(User.email) == body.email).first()
    if db_user and not db_user.verified:
        send_verification(db, db_user)
    return {"message": get(lang, "common.auth.verificationSent")}


@router.post("/forgotPassword", response_model=Message)
def forgot_password(body: EmailOnly, db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    db_user = db.query(User).filter(func.lower(User.email) == body.email).first()
    if not db_user:
        raise HTTPException(status_code=404, detail=get(lang, "common.auth.userNotFound"))
    change_password_id = action_tokens.issue(db, db_user, action_token.RESET, cfg.RESET_TOKEN_EXPIRE_MINUTES)
    email_service.send_password_reset(db_user.email, change_password_id)
    return {"message": get(lang, "common.auth.forgotPasswordSent")}


@router.post("/resetPassword", response_model=Message)
def reset_password(body: ResetPassword, db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    db_user = action_tokens.consume(db, body.change_password_id, action_token.RESET)
    if not db_user:
        raise HTTPException(status_code=404, detail=get(lang, "common.auth.resetInvalid"))
    db_user.password = hash_password(body.password)
    # the reset link proved ownership of the mailbox
    db_user.verified = True
    db.commit()
    logger.info("password reset for user %s", db_user.id)
    return {"message": get(lang, "common.auth.passwordReset")}
