"""Per-locale message tables.

The API answers in the locale sent in the ``locale`` request header and
falls back to ``DEFAULT_LOCALE`` for anything it does not know. Lookups use
dotted paths (``"common.roles.noAccess"``) or key lists.
"""
from typing import Any, Optional, Sequence, Union

from authapp.config import DEFAULT_LOCALE

LANGUAGES = {
    "en": {
        "common": {
            "roles": {
                "noAccess": "You do not have access to this page.",
                "notAuthorized": "You are not authorized to view this content.",
            },
            "auth": {
                "emailExists": "An account with that email already exists.",
                "invalidCredentials": "Invalid email or password.",
                "notVerified": "Please verify your email address before logging in.",
                "twoFactorRequired": "Enter the code from your authenticator app.",
                "invalidCode": "The code you entered is not valid.",
                "twoFactorExpired": "Your login attempt has expired. Please log in again.",
                "missingToken": "Missing token",
                "invalidToken": "Invalid token",
                "expiredToken": "Token has expired",
                "emailVerified": "Your email address has been verified.",
                "verificationInvalid": "This verification link is invalid or has expired.",
                "verificationSent": "If the account exists, a verification email has been sent.",
                "forgotPasswordSent": "An email with instructions to reset your password has been sent.",
                "userNotFound": "No account was found for that email address.",
                "resetInvalid": "This password reset link is invalid or has expired.",
                "passwordReset": "Your password has been reset.",
                "passwordChanged": "Your password has been changed.",
                "wrongPassword": "Your current password is incorrect.",
                "samePassword": "The new password must differ from the current one.",
            },
            "twoFactor": {
                "alreadyEnabled": "Two-factor authentication is already enabled.",
                "notEnabled": "Two-factor authentication is not enabled.",
                "noSecret": "Generate a two-factor secret first.",
                "enabled": "Two-factor authentication has been enabled.",
                "disabled": "Two-factor authentication has been disabled.",
            },
            "todos": {
                "notFound": "Todo not found",
                "notAllowed": "You are not allowed to change this todo.",
                "deleted": "Todo deleted",
            },
            "errors": {
                "unknown": "Something went wrong. Please try again.",
                "internal": "Internal server error",
            },
            "validation": {
                "required": "This field is required.",
                "minLength": "Must be at least {length} characters.",
                "maxLength": "Must be at most {length} characters.",
                "email": "Enter a valid email address.",
                "match": "Values do not match.",
                "numeric": "Must be a number.",
                "valid": "Looks good!",
            },
        },
        "alerts": {
            "login": {"401": "Invalid email or password.", "404": "Invalid email or password."},
            "signup": {"200": "Account created. Check your inbox to verify your email."},
            "accessPage": {
                "401": "You do not have access to this page.",
                "403": "You are not authorized to view this content.",
                "login": "Please log in to continue.",
            },
            "twoFactor": {"421": "The code you entered is not valid.", "404": "Your login attempt has expired."},
            "verifyEmail": {"404": "This verification link is invalid or has expired."},
            "forgotPassword": {"200": "Check your inbox for a reset link.", "404": "No account was found for that email address."},
            "todo": {"403": "You are not allowed to change this todo.", "404": "Todo not found"},
        },
    },
    "es": {
        "common": {
            "roles": {
                "noAccess": "No tienes acceso a esta página.",
                "notAuthorized": "No estás autorizado para ver este contenido.",
            },
            "auth": {
                "emailExists": "Ya existe una cuenta con ese email.",
                "invalidCredentials": "Email o contraseña incorrectos.",
                "notVerified": "Verifica tu email antes de iniciar sesión.",
                "twoFactorRequired": "Introduce el código de tu app de autenticación.",
                "invalidCode": "El código introducido no es válido.",
                "twoFactorExpired": "Tu intento de inicio de sesión ha caducado.",
                "missingToken": "Falta el token",
                "invalidToken": "Token inválido",
                "expiredToken": "El token ha expirado",
                "emailVerified": "Tu email ha sido verificado.",
                "verificationInvalid": "Este enlace de verificación no es válido o ha caducado.",
                "verificationSent": "Si la cuenta existe, se ha enviado un email de verificación.",
                "forgotPasswordSent": "Te hemos enviado un email para restablecer tu contraseña.",
                "userNotFound": "No existe ninguna cuenta con ese email.",
                "resetInvalid": "Este enlace para restablecer la contraseña no es válido o ha caducado.",
                "passwordReset": "Tu contraseña ha sido restablecida.",
                "passwordChanged": "Tu contraseña ha sido cambiada.",
                "wrongPassword": "Tu contraseña actual es incorrecta.",
                "samePassword": "La nueva contraseña debe ser distinta de la actual.",
            },
            "twoFactor": {
                "alreadyEnabled": "La verificación en dos pasos ya está activada.",
                "notEnabled": "La verificación en dos pasos no está activada.",
                "noSecret": "Genera primero un secreto de verificación.",
                "enabled": "Verificación en dos pasos activada.",
                "disabled": "Verificación en dos pasos desactivada.",
            },
            "todos": {
                "notFound": "Tarea no encontrada",
                "notAllowed": "No puedes modificar esta tarea.",
                "deleted": "Tarea eliminada",
            },
            "errors": {
                "unknown": "Algo salió mal. Inténtalo de nuevo.",
                "internal": "Error interno del servidor",
            },
            "validation": {
                "required": "Este campo es obligatorio.",
                "minLength": "Debe tener al menos {length} caracteres.",
                "maxLength": "Debe tener como máximo {length} caracteres.",
                "email": "Introduce un email válido.",
                "match": "Los valores no coinciden.",
                "numeric": "Debe ser un número.",
                "valid": "¡Correcto!",
            },
        },
        "alerts": {
            "login": {"401": "Email o contraseña incorrectos.", "404": "Email o contraseña incorrectos."},
            "signup": {"200": "Cuenta creada. Revisa tu bandeja de entrada para verificar tu email."},
            "accessPage": {
                "401": "No tienes acceso a esta página.",
                "403": "No estás autorizado para ver este contenido.",
                "login": "Inicia sesión para continuar.",
            },
            "twoFactor": {"421": "El código introducido no es válido.", "404": "Tu intento de inicio de sesión ha caducado."},
            "verifyEmail": {"404": "Este enlace de verificación no es válido o ha caducado."},
            "forgotPassword": {"200": "Revisa tu bandeja de entrada.", "404": "No existe ninguna cuenta con ese email."},
            "todo": {"403": "No puedes modificar esta tarea.", "404": "Tarea no encontrada"},
        },
    },
}


def get_text(locale: Optional[str] = None) -> dict:
    """Return the language data for ``locale`` (``"es-ES"`` resolves to ``"es"``)."""
    if locale:
        code = locale.replace("_", "-").split("-")[0].lower()
        if code in LANGUAGES:
            return LANGUAGES[code]
    return LANGUAGES.get(DEFAULT_LOCALE, LANGUAGES["en"])


def get(data: Any, path: Union[str, Sequence[str]], default: Any = None) -> Any:
    keys = path.split(".") if isinstance(path, str) else path
    current = data
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current
