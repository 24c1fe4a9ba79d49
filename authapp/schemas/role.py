from typing import Any, List, Optional

from pydantic import BaseModel, validator


class PageAccess(BaseModel):
    # a missing or non-string path matches no route
    path: Optional[str] = None

    @validator("path", pre=True)
    def path_is_text(cls, v: Any):
        return v if isinstance(v, str) else None


class RouteRoleIn(BaseModel):
    route: str
    read: List[str] = []
    write: List[str] = []

    @validator("route")
    def route_is_path(cls, v):
        v = v.strip()
        if not v.startswith("/"):
            raise ValueError("route must start with '/'")
        return v


class RouteRoleOut(RouteRoleIn):
    id: int

    class Config:
        from_attributes = True
