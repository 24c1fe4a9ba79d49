import logging
from datetime import datetime, timedelta, UTC
from typing import Optional

from fastapi import Depends, Header, HTTPException
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from authapp.config import SECRET_KEY, ALGORITHM, APPLICATION_ID
from authapp.database import get_db
from authapp.language import get, get_text
from authapp.models.user import User
from authapp.models.registration import Registration

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PASSWORD_MAX_BYTES = 72


def password_too_long(password: str) -> bool:
    return isinstance(password, str) and len(password.encode("utf-8")) > PASSWORD_MAX_BYTES


def hash_password(password: str):
    """Hash a password after validating bcrypt's 72-byte limit.

    Raises ValueError if the UTF-8 encoding of the password exceeds 72 bytes.
    """
    if password_too_long(password):
        # make the failure explicit and consistent
        raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain, hashed):
    """Verify a plaintext password against a hash.

    If verification raises a ValueError (for example plain >72 bytes), return False
    to allow the caller to respond with an authentication failure instead of an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_token(data: dict):
    data = data.copy()
    # read expiry at call-time so tests (and runtime overrides) that modify
    # authapp.config.ACCESS_TOKEN_EXPIRE_MINUTES take effect immediately
    import authapp.config as _cfg
    expire = datetime.now(UTC) + timedelta(minutes=_cfg.ACCESS_TOKEN_EXPIRE_MINUTES)
    data.update({"exp": int(expire.timestamp())})  # JWT spec uses Unix timestamp
    return jwt.encode(data, SECRET_KEY, algorithm=ALGORITHM)


def create_user_token(user: User):
    return create_token({"sub": str(user.id), "email": user.email})


def language_data(locale: Optional[str] = Header(None)) -> dict:
    """Language data for the request's ``locale`` header."""
    return get_text(locale)


def _extract_token(authorization: Optional[str], token_query: Optional[str]) -> Optional[str]:
    """Return token from Authorization header (Bearer ...) or token query param (compat).
    Header has precedence.
    """
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return token_query


def _unauthorized(lang: dict, key: str) -> HTTPException:
    # the challenge header tells callers a login is needed, not a role
    return HTTPException(status_code=401, detail=get(lang, key), headers={"WWW-Authenticate": "Bearer"})


def get_current_user(
    authorization: Optional[str] = Header(None),
    token: Optional[str] = None,
    db: Session = Depends(get_db),
    lang: dict = Depends(language_data),
) -> User:
    tok = _extract_token(authorization, token)
    if not tok:
        raise _unauthorized(lang, "common.auth.missingToken")
    try:
        # jwt.decode validates exp automatically
        payload = jwt.decode(tok, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise _unauthorized(lang, "common.auth.expiredToken")
    except JWTError:
        raise _unauthorized(lang, "common.auth.invalidToken")

    user_id = payload.get("sub")
    user = db.get(User, int(user_id)) if user_id and str(user_id).isdigit() else None
    if not user:
        raise _unauthorized(lang, "common.auth.invalidToken")
    return user


def application_roles(user: User, application_id: Optional[str] = None) -> list:
    """Roles from the user's registration for the configured application.

    Raises LookupError when the user is not registered for the application.
    """
    application_id = application_id or APPLICATION_ID
    matches = [r for r in user.registrations if r.application_id == application_id]
    if not matches:
        raise LookupError(f"user {user.id} has no registration for application {application_id}")
    return list(matches[0].roles or [])


def register_user(db: Session, user: User, roles=None):
    registration = Registration(application_id=APPLICATION_ID, roles=list(roles or []))
    user.registrations.append(registration)
    db.add(registration)
    return registration


def require_roles(*allowed):
    """Dependency factory: the current user must hold one of ``allowed``."""
    def dependency(user: User = Depends(get_current_user), lang: dict = Depends(language_data)) -> User:
        try:
            roles = application_roles(user)
        except LookupError:
            raise HTTPException(status_code=403, detail=get(lang, "common.roles.notAuthorized"))
        if not any(role in roles for role in allowed):
            logger.warning("user %s denied, needs one of %s", user.id, allowed)
            raise HTTPException(status_code=403, detail=get(lang, "common.roles.notAuthorized"))
        return user
    return dependency
