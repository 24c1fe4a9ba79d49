from sqlalchemy import Column, Integer, String, JSON
from authapp.database import Base

class RouteRole(Base):
    """Roles allowed to read (view) and write (modify) a frontend route."""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True)
    route = Column(String, unique=True, index=True, nullable=False)
    read = Column(JSON, nullable=False, default=list)
    write = Column(JSON, nullable=False, default=list)
