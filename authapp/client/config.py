import os

API_BASEURL = os.environ.get("API_BASEURL", "http://localhost:8000")
DEFAULT_LOCALE = os.environ.get("CLIENT_LOCALE", "en")

# Frontend routes the controllers redirect to
LINKS = {
    "home": "/",
    "login": "/auth/login",
    "signup": "/auth/signup",
    "verifyEmail": "/auth/verify",
    "twoFactor": "/auth/two-factor",
    "forgotPassword": "/auth/forgot-password",
    "resetPassword": "/auth/reset-password",
    "profile": "/user/profile",
    "changePassword": "/user/change-password",
    "userTwoFactor": "/user/two-factor",
    "todos": "/user/todos",
}
