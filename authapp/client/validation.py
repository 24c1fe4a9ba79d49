"""Form input validation.

``validate_input`` checks one value against the rules declared for it in a
form definition and returns the list of error messages (empty when valid).
``FormHandler`` turns those errors into the per-input state a view shows.
"""
from typing import Any, Dict, List, Optional, Tuple

from email_validator import validate_email, EmailNotValidError

from authapp.language import get


def _text(language_data: dict, rule: str, **kwargs) -> str:
    template = get(language_data, ["common", "validation", rule], rule)
    return template.format(**kwargs)


def validate_input(value: Any, input_type: Optional[str], validation: Optional[Dict[str, Any]], language_data: dict,
                   form_values: Optional[Dict[str, Any]] = None) -> List[str]:
    validation = validation or {}
    value = "" if value is None else str(value)
    errors = []

    if not value.strip():
        if validation.get("required"):
            errors.append(_text(language_data, "required"))
        # nothing else to check on an empty optional input
        return errors

    min_length = validation.get("minLength")
    if min_length is not None and len(value) < min_length:
        errors.append(_text(language_data, "minLength", length=min_length))

    max_length = validation.get("maxLength")
    if max_length is not None and len(value) > max_length:
        errors.append(_text(language_data, "maxLength", length=max_length))

    if input_type == "email" or validation.get("email"):
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            errors.append(_text(language_data, "email"))

    if input_type == "number" or validation.get("numeric"):
        try:
            float(value)
        except ValueError:
            errors.append(_text(language_data, "numeric"))

    other = validation.get("match")
    if other and form_values is not None and value != str(form_values.get(other) or ""):
        errors.append(_text(language_data, "match"))

    return errors


class FormHandler:

    @staticmethod
    def validate(target: str, errors: List[str], language_data: dict) -> Tuple[bool, str, str]:
        """Return ``(is_error, error_text, valid_text)`` for input ``target``."""
        if errors:
            return True, " ".join(errors), ""
        return False, "", _text(language_data, "valid")

    @staticmethod
    def input_status(form_data: Dict[str, dict], name: str) -> str:
        entry = form_data.get(name) or {}
        if "error" not in entry:
            return ""
        return "is-invalid" if entry["error"] else "is-valid"
