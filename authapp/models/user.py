from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from authapp.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    first_name = Column(String, nullable=False, default="")
    last_name = Column(String, nullable=False, default="")
    verified = Column(Boolean, nullable=False, default=False)
    two_factor_enabled = Column(Boolean, nullable=False, default=False)
    # base32 TOTP secret; set while enabling, kept while enabled
    two_factor_secret = Column(String, nullable=True)
    # last accepted TOTP time step, codes at or before it are refused
    two_factor_last_step = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    registrations = relationship("Registration", back_populates="user", cascade="all, delete-orphan")
    todos = relationship("Todo", back_populates="owner", cascade="all, delete-orphan")
