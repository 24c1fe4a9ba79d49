import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy import func
from sqlalchemy.orm import Session

from authapp.schemas.user import UserOut, UserUpdate, ChangePassword
from authapp.schemas.auth import TwoFactorCode, TwoFactorSecret, Message
from authapp.models.user import User
from authapp.routers.auth import send_verification, INVALID_TWO_FACTOR_CODE
from authapp.utils import two_factor
from authapp.utils.auth import get_current_user, hash_password, verify_password, language_data
from authapp.utils.profile import user_out
from authapp.database import get_db
from authapp.language import get

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["user"])


def _invalid_code(lang):
    return JSONResponse(status_code=INVALID_TWO_FACTOR_CODE, content={"message": get(lang, "common.auth.invalidCode")})


@router.get("/", response_model=UserOut)
def read_profile(user: User = Depends(get_current_user)):
    return user_out(user)


@router.patch("/", response_model=UserOut)
def update_profile(changes: UserUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    email_changed = changes.email is not None and changes.email != user.email
    if email_changed:
        taken = db.query(User).filter(func.lower(User.email) == changes.email, User.id != user.id).first()
        if taken:
            raise HTTPException(status_code=400, detail=get(lang, "common.auth.emailExists"))
        user.email = changes.email
        user.verified = False
    if changes.first_name is not None:
        user.first_name = changes.first_name.strip()
    if changes.last_name is not None:
        user.last_name = changes.last_name.strip()
    db.commit()
    db.refresh(user)

    if email_changed:
        logger.info("user %s changed email, verification required", user.id)
        send_verification(db, user)
    return user_out(user)


@router.post("/changePassword", response_model=Message)
def change_password(body: ChangePassword, user: User = Depends(get_current_user), db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    if not verify_password(body.current_password, user.password):
        raise HTTPException(status_code=401, detail=get(lang, "common.auth.wrongPassword"))
    if body.current_password == body.password:
        raise HTTPException(status_code=400, detail=get(lang, "common.auth.samePassword"))
    user.password = hash_password(body.password)
    db.commit()
    logger.info("user %s changed password", user.id)
    return {"message": get(lang, "common.auth.passwordChanged")}


@router.post("/twoFactor/secret", response_model=TwoFactorSecret)
def two_factor_secret(user: User = Depends(get_current_user), db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    if user.two_factor_enabled:
        raise HTTPException(status_code=400, detail=get(lang, "common.twoFactor.alreadyEnabled"))
    user.two_factor_secret = two_factor.generate_secret()
    user.two_factor_last_step = None
    db.commit()
    return {"secret": user.two_factor_secret, "uri": two_factor.provisioning_uri(user.email, user.two_factor_secret)}


@router.post("/twoFactor/enable", response_model=Message)
def enable_two_factor(body: TwoFactorCode, user: User = Depends(get_current_user), db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    if user.two_factor_enabled:
        raise HTTPException(status_code=400, detail=get(lang, "common.twoFactor.alreadyEnabled"))
    if not user.two_factor_secret:
        raise HTTPException(status_code=400, detail=get(lang, "common.twoFactor.noSecret"))
    step = two_factor.accepted_step(user.two_factor_secret, body.code, user.two_factor_last_step)
    if step is None:
        return _invalid_code(lang)
    user.two_factor_last_step = step
    user.two_factor_enabled = True
    db.commit()
    logger.info("user %s enabled two-factor", user.id)
    return {"message": get(lang, "common.twoFactor.enabled")}


@router.post("/twoFactor/disable", response_model=Message)
def disable_two_factor(body: TwoFactorCode, user: User = Depends(get_current_user), db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    if not user.two_factor_enabled:
        raise HTTPException(status_code=400, detail=get(lang, "common.twoFactor.notEnabled"))
    step = two_factor.accepted_step(user.two_factor_secret, body.code, user.two_factor_last_step)
    if step is None:
        return _invalid_code(lang)
    user.two_factor_last_step = step
    user.two_factor_enabled = False
    user.two_factor_secret = None
    db.commit()
    logger.info("user %s disabled two-factor", user.id)
    return {"message": get(lang, "common.twoFactor.disabled")}
