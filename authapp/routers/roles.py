"""Roles API.

Lets the frontend ask whether the logged-in user may view a page, and lets
admins maintain the route → roles table behind that check.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from authapp.schemas.role import PageAccess, RouteRoleIn, RouteRoleOut
from authapp.models.role import RouteRole
from authapp.models.user import User
from authapp.database import get_db
from authapp.utils.auth import get_current_user, application_roles, require_roles, language_data
from authapp.language import get

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/roles", tags=["roles"])


def can_read(user_roles, allowed_read_roles) -> bool:
    return any(role in user_roles for role in allowed_read_roles)


@router.post("/canAccessPage", responses={
    401: {"description": "User lacks every read role of the page"},
    403: {"description": "Access could not be determined"},
})
def can_access_page(body: Optional[PageAccess] = None, user: User = Depends(get_current_user), db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    """200 with an empty body when one of the user's roles may read ``path``."""
    path = body.path if body else None
    try:
        user_roles = application_roles(user)
        route = db.query(RouteRole).filter(RouteRole.route == path).first() if path else None
        if route is None:
            raise LookupError(f"no roles configured for route {path!r}")
        allowed = can_read(user_roles, route.read or [])
    except (LookupError, SQLAlchemyError) as e:
        logger.warning("page access check failed for user %s: %s", user.id, e)
        return JSONResponse(status_code=403, content={"message": get(lang, "common.roles.notAuthorized")})

    if not allowed:
        logger.info("user %s has no read role for %s", user.id, path)
        return JSONResponse(status_code=401, content={"message": get(lang, "common.roles.noAccess")})
    return Response(status_code=200)


@router.get("/", response_model=List[RouteRoleOut])
def list_route_roles(user: User = Depends(require_roles("admin")), db: Session = Depends(get_db)):
    return db.query(RouteRole).order_by(RouteRole.route).all()


@router.put("/", response_model=RouteRoleOut)
def upsert_route_roles(body: RouteRoleIn, user: User = Depends(require_roles("admin")), db: Session = Depends(get_db)):
    route = db.query(RouteRole).filter(RouteRole.route == body.route).first()
    if route is None:
        route = RouteRole(route=body.route)
        db.add(route)
    # reassign so the JSON columns are flagged dirty
    route.read = list(body.read)
    route.write = list(body.write)
    db.commit()
    db.refresh(route)
    logger.info("user %s set roles for %s: read=%s write=%s", user.id, route.route, route.read, route.write)
    return route
