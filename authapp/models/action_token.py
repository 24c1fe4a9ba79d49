from datetime import datetime, timedelta, UTC
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from authapp.database import Base

VERIFY = "verify"
RESET = "reset"
TWO_FACTOR = "two_factor"


def utcnow():
    # naive UTC, SQLite drops tzinfo on the way back
    return datetime.now(UTC).replace(tzinfo=None)


class ActionToken(Base):
    """One-time id handed to the user for email verification, password
    reset or the second step of a two-factor login."""
    __tablename__ = "action_tokens"

    id = Column(Integer, primary_key=True)
    token = Column(String, unique=True, index=True, nullable=False)
    kind = Column(String, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    attempts = Column(Integer, nullable=False, default=0)

    @staticmethod
    def expiry(minutes: float):
        return utcnow() + timedelta(minutes=minutes)

    def is_expired(self) -> bool:
        return self.expires_at <= utcnow()
