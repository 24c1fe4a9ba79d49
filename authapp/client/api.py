"""HTTP client for the AuthApp API.

Endpoints are declared once in ``API_SERVICE`` by name with their path and
method. Responses come back as ``APIResponse`` whatever their status; it is
up to the feature controllers to decide what a status means.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from authapp.client.config import API_BASEURL, DEFAULT_LOCALE

logger = logging.getLogger(__name__)

API_SERVICE = {
    "post_signup": {"PATH_SEARCH": "/api/auth/signup", "PATH_METHOD": "post"},
    "post_login": {"PATH_SEARCH": "/api/auth/login", "PATH_METHOD": "post"},
    "post_two_factor_login": {"PATH_SEARCH": "/api/auth/twoFactor", "PATH_METHOD": "post"},
    "post_verify_email": {"PATH_SEARCH": "/api/auth/verifyEmail", "PATH_METHOD": "post"},
    "post_resend_verification": {"PATH_SEARCH": "/api/auth/resendVerification", "PATH_METHOD": "post"},
    "post_forgot_password": {"PATH_SEARCH": "/api/auth/forgotPassword", "PATH_METHOD": "post"},
    "post_reset_password": {"PATH_SEARCH": "/api/auth/resetPassword", "PATH_METHOD": "post"},
    "get_user": {"PATH_SEARCH": "/api/user/", "PATH_METHOD": "get"},
    "patch_user": {"PATH_SEARCH": "/api/user/", "PATH_METHOD": "patch"},
    "post_change_password": {"PATH_SEARCH": "/api/user/changePassword", "PATH_METHOD": "post"},
    "post_two_factor_secret": {"PATH_SEARCH": "/api/user/twoFactor/secret", "PATH_METHOD": "post"},
    "post_two_factor_enable": {"PATH_SEARCH": "/api/user/twoFactor/enable", "PATH_METHOD": "post"},
    "post_two_factor_disable": {"PATH_SEARCH": "/api/user/twoFactor/disable", "PATH_METHOD": "post"},
    "get_todos": {"PATH_SEARCH": "/api/todos/", "PATH_METHOD": "get"},
    "post_todo": {"PATH_SEARCH": "/api/todos/", "PATH_METHOD": "post"},
    "patch_todo": {"PATH_SEARCH": "/api/todos/{todo_id}", "PATH_METHOD": "patch"},
    "delete_todo": {"PATH_SEARCH": "/api/todos/{todo_id}", "PATH_METHOD": "delete"},
    "post_can_access_page": {"PATH_SEARCH": "/api/roles/canAccessPage", "PATH_METHOD": "post"},
}


@dataclass
class APIResponse:
    status: int
    data: Dict[str, Any] = field(default_factory=dict)
    # lower-cased header names
    headers: Dict[str, str] = field(default_factory=dict)


def form_values(form_data: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten ``{name: {"value": v, ...}}`` form state into ``{name: v}``.

    Plain values are passed through, so a ready JSON body works too.
    """
    body = {}
    for name, entry in (form_data or {}).items():
        body[name] = entry.get("value") if isinstance(entry, dict) else entry
    return body


class APIClient:
    """HTTP client for the AuthApp backend.

    ``client`` may be any ``httpx.Client`` (FastAPI's TestClient included);
    one is created against ``base_url`` when omitted.
    """

    def __init__(self, base_url: str = API_BASEURL, locale: str = DEFAULT_LOCALE, client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip("/")
        self.locale = locale
        self.token: Optional[str] = None
        self.client = client or httpx.Client(base_url=self.base_url, timeout=httpx.Timeout(30.0, connect=10.0))

    def set_token(self, token: Optional[str]):
        self.token = token

    def _headers(self) -> Dict[str, str]:
        headers = {"locale": self.locale}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def fetch_results(self, name: str, form_data: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None, **path_params) -> APIResponse:
        endpoint = API_SERVICE[name]
        path = endpoint["PATH_SEARCH"].format(**path_params)
        method = endpoint["PATH_METHOD"]
        kwargs = {"headers": self._headers(), "params": params}
        if method != "get" and method != "delete":
            kwargs["json"] = form_values(form_data)

        response = self.client.request(method.upper(), path, **kwargs)
        logger.debug("%s %s -> %s", method.upper(), path, response.status_code)
        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {"message": response.text}
        if not isinstance(data, dict):
            data = {"items": data}
        headers = {k.lower(): v for k, v in response.headers.items()}
        return APIResponse(status=response.status_code, data=data, headers=headers)

    def close(self):
        self.client.close()
