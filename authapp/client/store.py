from typing import Any, Dict, Optional


class Store:
    """Client-side session state: the logged-in user and their token."""

    def __init__(self):
        self.user: Optional[Dict[str, Any]] = None
        self.token: Optional[str] = None

    def set_user(self, data: Optional[Dict[str, Any]]):
        """Take a login payload (``{token, user}``) or a bare user dict.

        Anything else (a 2FA challenge, a plain message) leaves the store as is.
        """
        data = data or {}
        if "token" in data:
            self.token = data["token"]
            self.user = data.get("user")
        elif "id" in data:
            self.user = data

    def logout(self):
        self.user = None
        self.token = None

    @property
    def logged_in(self) -> bool:
        return self.token is not None
