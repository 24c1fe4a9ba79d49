"""Feature controllers.

Each controller is a table of which statuses redirect where and which
alert type every other status shows. ``handle_response`` resolves an API
response against the tables, ``handle_action`` applies the result.
"""
from typing import Any, Callable, Dict, Optional, Union

from authapp.client import response_handler
from authapp.client.api import APIResponse
from authapp.client.config import LINKS
from authapp.client.response_handler import AlertError, ResponseAction
from authapp.language import get


class Controller:
    def __init__(self, name: str, redirect_data: Dict[str, dict], alert_data: Optional[Dict[str, str]] = None,
                 api_message: bool = True, lang_key: Optional[str] = None):
        self.name = name
        self.redirect_data = redirect_data
        # every status not listed falls back to the "500" type
        self.alert_data = alert_data or {"500": "danger"}
        self.api_message = api_message
        self.lang_key = lang_key

    def handle_response(self, response: APIResponse, language_data: dict) -> ResponseAction:
        """Resolve to a redirect or raise ``AlertError`` with the message to show."""
        return response_handler.status(
            response, language_data, self.redirect_data, self.alert_data,
            api_message=self.api_message, lang_key=self.lang_key,
        )

    def handle_action(self, response_object: Union[ResponseAction, AlertError, dict], data: Any = None,
                      action: Optional[Callable[[Any], Any]] = None):
        """Return the alert to display, or False when the user was redirected."""
        response = response_handler.action(response_object, data, action)
        if response and response.get("type"):
            return response
        return False

    def __repr__(self):
        return f"<Controller {self.name}>"


class PageAccessController(Controller):
    """200 lets the user through to the page they asked for.

    A 401 carrying a ``WWW-Authenticate`` challenge comes from the token
    check (missing, expired or rejected), so it sends the user to log in.
    A bare 401 or a 403 is about roles and sends them home.
    """

    def handle_response(self, response: APIResponse, language_data: dict, path: str = LINKS["home"]) -> ResponseAction:
        if response.status == 200:
            return ResponseAction(redirect=path)
        if response.status == 401 and "www-authenticate" in response.headers:
            message = get(language_data, ["alerts", self.lang_key, "login"])
            return ResponseAction(redirect=LINKS["login"], alert=True, message=message)
        return super().handle_response(response, language_data)


login = Controller("login", {
    "200": {"redirect": LINKS["home"], "alert": False},
    "212": {"redirect": LINKS["verifyEmail"], "alert": True},
    "242": {"redirect": LINKS["twoFactor"], "alert": False},
}, lang_key="login")

two_factor_login = Controller("twoFactorLogin", {
    "200": {"redirect": LINKS["home"], "alert": False},
    "404": {"redirect": LINKS["login"], "alert": True},
}, lang_key="twoFactor")

signup = Controller("signup", {
    "200": {"redirect": LINKS["login"], "alert": True},
}, {"400": "warning", "500": "danger"}, lang_key="signup")

verify_email = Controller("verifyEmail", {
    "200": {"redirect": LINKS["login"], "alert": True},
}, lang_key="verifyEmail")

resend_verification = Controller("resendVerification", {}, {"200": "success", "500": "danger"})

forgot_password = Controller("forgotPassword", {
    "200": {"redirect": LINKS["login"], "alert": True},
}, lang_key="forgotPassword")

reset_password = Controller("resetPassword", {
    "200": {"redirect": LINKS["login"], "alert": True},
})

change_password = Controller("changePassword", {
    "200": {"redirect": LINKS["home"], "alert": True},
})

profile = Controller("profile", {
    "200": {"redirect": LINKS["profile"], "alert": False},
}, {"400": "warning", "500": "danger"})

two_factor = Controller("twoFactor", {
    "200": {"redirect": LINKS["userTwoFactor"], "alert": True},
}, {"400": "warning", "500": "danger"})

todo = Controller("todo", {
    "200": {"redirect": LINKS["todos"], "alert": False},
    "201": {"redirect": LINKS["todos"], "alert": False},
}, lang_key="todo")

page_access = PageAccessController("accessPage", {
    "401": {"redirect": LINKS["home"], "alert": True},
    "403": {"redirect": LINKS["home"], "alert": True},
}, lang_key="accessPage")
