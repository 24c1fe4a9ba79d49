"""Submitting a form end to end: validate, call the API, run the controller."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from authapp.client.api import APIClient, form_values
from authapp.client.controllers import Controller, page_access
from authapp.client.response_handler import AlertError, ResponseAction
from authapp.client.store import Store
from authapp.client.validation import FormHandler, validate_input
from authapp.language import get_text

logger = logging.getLogger(__name__)


@dataclass
class FormResult:
    form_data: Dict[str, dict]
    redirect: Optional[str] = None
    alert: Optional[Dict[str, str]] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return any(entry.get("error") for entry in self.form_data.values())


class FormFlow:
    def __init__(self, api: APIClient, controller: Controller, form: List[dict], endpoint: str,
                 store: Optional[Store] = None, language_data: Optional[dict] = None):
        self.api = api
        self.controller = controller
        self.form = form
        self.endpoint = endpoint
        self.store = store
        self.language_data = language_data or get_text(api.locale)

    def validate(self, form_data: Dict[str, dict]) -> Dict[str, dict]:
        values = form_values(form_data)
        validated = {}
        for entry in self.form:
            name = entry["name"]
            errors = validate_input(values.get(name), entry.get("type"), entry.get("validation"), self.language_data, values)
            is_error, error_text, valid_text = FormHandler.validate(name, errors, self.language_data)
            validated[name] = {
                **(form_data.get(name) or {}),
                "error": is_error,
                "errorText": error_text,
                "validText": valid_text,
            }
        return validated

    def body(self, form_data: Dict[str, dict], extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """JSON body for the API. Inputs the form never set are left out, an
        emptied input is sent as "" so the field is cleared."""
        values = form_values(form_data)
        body = {e["name"]: values.get(e["name"]) for e in self.form if e.get("submit", True) and values.get(e["name"]) is not None}
        body.update(extra or {})
        return body

    def submit(self, form_data: Dict[str, dict], extra: Optional[Dict[str, Any]] = None, **path_params) -> FormResult:
        validated = self.validate(form_data)
        result = FormResult(form_data=validated)
        if result.has_errors:
            return result

        response = self.api.fetch_results(self.endpoint, self.body(validated, extra), **path_params)
        result.data = response.data
        try:
            action = self.controller.handle_response(response, self.language_data)
        except AlertError as error:
            logger.debug("%r alert on %s: %s", self.controller, response.status, error.content)
            result.alert = error.as_dict()
            return result

        self.controller.handle_action(action, response.data, self.store.set_user if self.store else None)
        if self.store is not None and self.store.token:
            self.api.set_token(self.store.token)
        result.redirect = action.redirect
        if action.alert:
            result.alert = {"type": "info", "content": action.message}
        return result


def check_page_access(api: APIClient, path: str, language_data: Optional[dict] = None) -> ResponseAction:
    """Ask the API whether the current user may view ``path`` and resolve where to go."""
    response = api.fetch_results("post_can_access_page", {"path": path})
    return page_access.handle_response(response, language_data or get_text(api.locale), path=path)
