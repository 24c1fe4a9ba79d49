import time

import pyotp
from pyotp.utils import strings_equal

from authapp.config import TWO_FACTOR_ISSUER


def generate_secret():
    """Generate a base32 secret key for TOTP"""
    return pyotp.random_base32()


def provisioning_uri(email, secret):
    """Return the otpauth URI for authenticator app setup"""
    return pyotp.TOTP(secret).provisioning_uri(name=email, issuer_name=TWO_FACTOR_ISSUER)


def _now():
    return time.time()


def accepted_step(secret, code, last_step=None, window=1):
    """Return the time step a valid code belongs to, or None.

    One step of clock drift is allowed either way. Steps at or before
    ``last_step`` are refused, so each code is accepted only once.
    """
    if not secret or not code:
        return None
    totp = pyotp.TOTP(secret)
    code = str(code).strip()
    current = int(_now() // totp.interval)
    for step in range(current - window, current + window + 1):
        if last_step is not None and step <= last_step:
            continue
        if strings_equal(code, totp.generate_otp(step)):
            return step
    return None
