from authapp.models.user import User
from authapp.utils.auth import application_roles


def user_out(user: User) -> dict:
    """Public view of a user, with the roles of the configured application."""
    try:
        roles = application_roles(user)
    except LookupError:
        roles = []
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name or "",
        "last_name": user.last_name or "",
        "verified": bool(user.verified),
        "two_factor_enabled": bool(user.two_factor_enabled),
        "roles": roles,
    }
