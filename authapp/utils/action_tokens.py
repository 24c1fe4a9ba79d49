import secrets
from typing import Optional

from sqlalchemy.orm import Session

from authapp.models.action_token import ActionToken
from authapp.models.user import User


def issue(db: Session, user: User, kind: str, minutes: float) -> str:
    """Create a fresh one-time id for ``user``, dropping older ones of the same kind."""
    db.query(ActionToken).filter(ActionToken.user_id == user.id, ActionToken.kind == kind).delete()
    value = secrets.token_urlsafe(32)
    db.add(ActionToken(token=value, kind=kind, user_id=user.id, expires_at=ActionToken.expiry(minutes)))
    db.commit()
    return value


def lookup(db: Session, value: str, kind: str) -> Optional[ActionToken]:
    """Return the live token row, or None when unknown or expired (expired rows are purged)."""
    row = db.query(ActionToken).filter(ActionToken.token == value, ActionToken.kind == kind).first()
    if row and row.is_expired():
        db.delete(row)
        db.commit()
        return None
    return row


def consume(db: Session, value: str, kind: str) -> Optional[User]:
    row = lookup(db, value, kind)
    if not row:
        return None
    user = db.get(User, row.user_id)
    db.delete(row)
    return user
