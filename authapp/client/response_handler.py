"""Turn an API response into a redirect or an alert.

Every feature controller describes its statuses with two tables:

* ``redirect_data`` maps a status (as a string) to ``{"redirect": link,
  "alert": bool}``. A matching status resolves to a ``ResponseAction``.
* ``alert_data`` maps a status to an alert type (``"danger"``,
  ``"warning"``, ``"success"`` ...). Anything that does not redirect raises
  an ``AlertError``; ``alert_data["500"]`` is the default type.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from authapp.client.api import APIResponse
from authapp.language import get

DEFAULT_ALERT_KEY = "500"
DEFAULT_ALERT_TYPE = "danger"


@dataclass
class ResponseAction:
    redirect: str
    alert: bool = False
    message: Optional[str] = None


class AlertError(Exception):
    """Raised with the alert the view should display instead of redirecting."""

    def __init__(self, type: str, content: str):
        super().__init__(content)
        self.type = type
        self.content = content

    def as_dict(self) -> Dict[str, str]:
        return {"type": self.type, "content": self.content}


def message_for(response: APIResponse, language_data: dict, api_message: bool = False, lang_key: Optional[str] = None) -> str:
    status = str(response.status)
    if api_message and response.data.get("message"):
        return response.data["message"]
    if lang_key:
        text = get(language_data, ["alerts", lang_key, status])
        if text:
            return text
    return get(language_data, "common.errors.unknown")


def status(response: APIResponse, language_data: dict, redirect_data: Dict[str, dict], alert_data: Dict[str, str],
           api_message: bool = False, lang_key: Optional[str] = None) -> ResponseAction:
    key = str(response.status)
    if key in redirect_data:
        entry = redirect_data[key]
        message = message_for(response, language_data, api_message, lang_key) if entry.get("alert") else None
        return ResponseAction(redirect=entry["redirect"], alert=bool(entry.get("alert")), message=message)

    alert_type = alert_data.get(key) or alert_data.get(DEFAULT_ALERT_KEY) or DEFAULT_ALERT_TYPE
    raise AlertError(alert_type, message_for(response, language_data, api_message, lang_key))


def action(response_object: Any, data: Any = None, set_data: Optional[Callable[[Any], Any]] = None) -> Optional[dict]:
    """Apply a resolved response.

    A ``ResponseAction`` hands ``data`` to ``set_data`` (the store update) and
    returns None, the caller follows the redirect. Alert dicts are returned so
    the caller can display them.
    """
    if isinstance(response_object, ResponseAction):
        if set_data is not None and data is not None:
            set_data(data)
        return None
    if isinstance(response_object, AlertError):
        return response_object.as_dict()
    if isinstance(response_object, dict) and response_object.get("type"):
        return response_object
    return None
