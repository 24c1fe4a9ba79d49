from datetime import datetime
from typing import Optional

from pydantic import BaseModel, validator


def _text_not_empty(v):
    if v is None:
        return v
    if not v.strip():
        raise ValueError("text cannot be empty")
    return v.strip()


class TodoCreate(BaseModel):
    text: str
    completed: bool = False

    @validator("text")
    def text_not_empty(cls, v):
        return _text_not_empty(v)


class TodoUpdate(BaseModel):
    text: Optional[str] = None
    completed: Optional[bool] = None

    @validator("text")
    def text_not_empty(cls, v):
        return _text_not_empty(v)


class TodoOut(BaseModel):
    id: int
    owner_id: int
    text: str
    completed: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
