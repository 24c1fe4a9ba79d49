from sqlalchemy.orm import Session

from authapp.models.role import RouteRole

DEFAULT_ROUTE_ROLES = {
    "/user/profile": {"read": ["user", "admin"], "write": ["user", "admin"]},
    "/user/change-password": {"read": ["user", "admin"], "write": ["user", "admin"]},
    "/user/two-factor": {"read": ["user", "admin"], "write": ["user", "admin"]},
    "/user/todos": {"read": ["user", "admin"], "write": ["user", "admin"]},
    "/admin/roles": {"read": ["admin"], "write": ["admin"]},
}


def seed_route_roles(db: Session, table=None):
    """Insert the default route roles that are not present yet. Existing rows are left alone."""
    table = DEFAULT_ROUTE_ROLES if table is None else table
    existing = {r.route for r in db.query(RouteRole.route).all()}
    added = 0
    for route, roles in table.items():
        if route in existing:
            continue
        db.add(RouteRole(route=route, read=list(roles["read"]), write=list(roles["write"])))
        added += 1
    db.commit()
    return added
