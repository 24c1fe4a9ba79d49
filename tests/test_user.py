import time
import uuid

import pyotp
import pytest
from fastapi.testclient import TestClient

import authapp.config as cfg
from authapp.main import app
from authapp.utils import two_factor


@pytest.fixture
def clock(monkeypatch):
    """Drive the TOTP clock by hand. Each call moves it one 30s step forward."""
    now = [time.time()]
    monkeypatch.setattr(two_factor, "_now", lambda: now[0])

    def tick():
        now[0] += 30
        return now[0]
    return tick


def _wrong_code(totp, at):
    valid = {totp.at(at + drift) for drift in (-30, 0, 30)}
    return next(c for c in ("000000", "111111", "222222", "333333") if c not in valid)


def test_read_profile(client, make_user, headers):
    user = make_user()
    r = client.get("/api/user/", headers=headers(user["token"]))
    assert r.status_code == 200
    data = r.json()
    assert data["email"] == user["email"]
    assert data["first_name"] == "Ada"
    assert data["roles"] == ["user"]
    assert data["two_factor_enabled"] is False


def test_profile_requires_token(client):
    r = client.get("/api/user/")
    assert r.status_code == 401
    assert r.json()["message"] == "Missing token"

    r = client.get("/api/user/", headers={"Authorization": "Bearer invalid"})
    assert r.status_code == 401

    r = client.get("/api/user/?token=invalid")
    assert r.status_code == 401


def test_update_names(client, make_user, headers):
    user = make_user()
    r = client.patch("/api/user/", json={"first_name": " Grace ", "last_name": "Hopper"}, headers=headers(user["token"]))
    assert r.status_code == 200
    assert r.json()["first_name"] == "Grace"
    assert r.json()["last_name"] == "Hopper"
    assert r.json()["verified"] is True


def test_update_email_requires_new_verification(client, make_user, headers, pending):
    user = make_user()
    new_email = f"new_{uuid.uuid4().hex[:8]}@example.com"
    r = client.patch("/api/user/", json={"email": new_email}, headers=headers(user["token"]))
    assert r.status_code == 200
    assert r.json()["email"] == new_email
    assert r.json()["verified"] is False

    r = client.post("/api/auth/login", json={"email": new_email, "password": user["password"]})
    assert r.status_code == 212

    assert client.post("/api/auth/verifyEmail", json={"verification_id": pending(new_email)}).status_code == 200
    r = client.post("/api/auth/login", json={"email": new_email, "password": user["password"]})
    assert r.status_code == 200


def test_update_email_conflict(client, make_user, headers):
    first = make_user()
    second = make_user()
    r = client.patch("/api/user/", json={"email": second["email"]}, headers=headers(first["token"]))
    assert r.status_code == 400
    assert "exists" in r.json()["message"].lower()


def test_change_password(client, make_user, headers):
    user = make_user()
    url = "/api/user/changePassword"

    r = client.post(url, json={"current_password": "wrong", "password": "NewPass456!"}, headers=headers(user["token"]))
    assert r.status_code == 401

    r = client.post(url, json={"current_password": user["password"], "password": user["password"]}, headers=headers(user["token"]))
    assert r.status_code == 400

    r = client.post(url, json={"current_password": user["password"], "password": "a" * 100}, headers=headers(user["token"]))
    assert r.status_code == 422

    r = client.post(url, json={"current_password": user["password"], "password": "NewPass456!"}, headers=headers(user["token"]))
    assert r.status_code == 200

    assert client.post("/api/auth/login", json={"email": user["email"], "password": "NewPass456!"}).status_code == 200


def test_two_factor_toggle_and_login(client, make_user, headers):
    user = make_user()
    h = headers(user["token"])

    # enabling needs a secret first
    r = client.post("/api/user/twoFactor/enable", json={"code": "123456"}, headers=h)
    assert r.status_code == 400

    r = client.post("/api/user/twoFactor/secret", headers=h)
    assert r.status_code == 200
    secret = r.json()["secret"]
    assert r.json()["uri"].startswith("otpauth://totp/")
    totp = pyotp.TOTP(secret)

    wrong = _wrong_code(totp)
    r = client.post("/api/user/twoFactor/enable", json={"code": wrong}, headers=h)
    assert r.status_code == 421

    r = client.post("/api/user/twoFactor/enable", json={"code": totp.now()}, headers=h)
    assert r.status_code == 200
    assert client.get("/api/user/", headers=h).json()["two_factor_enabled"] is True

    # no new secret while enabled
    assert client.post("/api/user/twoFactor/secret", headers=h).status_code == 400

    # login now stops at the second factor
    r = client.post("/api/auth/login", json={"email": user["email"], "password": user["password"]})
    assert r.status_code == 242
    two_factor_id = r.json()["two_factor_id"]
    assert "token" not in r.json()

    r = client.post("/api/auth/twoFactor", json={"two_factor_id": two_factor_id, "code": wrong})
    assert r.status_code == 421

    r = client.post("/api/auth/twoFactor", json={"two_factor_id": two_factor_id, "code": totp.now()})
    assert r.status_code == 200
    assert r.json()["token"]

    # the id is spent
    r = client.post("/api/auth/twoFactor", json={"two_factor_id": two_factor_id, "code": totp.now()})
    assert r.status_code == 404

    r = client.post("/api/user/twoFactor/disable", json={"code": wrong}, headers=h)
    assert r.status_code == 421
    r = client.post("/api/user/twoFactor/disable", json={"code": totp.now()}, headers=h)
    assert r.status_code == 200
    assert client.post("/api/user/twoFactor/disable", json={"code": totp.now()}, headers=h).status_code == 400

    r = client.post("/api/auth/login", json={"email": user["email"], "password": user["password"]})
    assert r.status_code == 200
def _enable_two_factor(client, h, clock):
    secret = client.post("/api/user/twoFactor/secret", headers=h).json()["secret"]
    totp = pyotp.TOTP(secret)
    assert client.post("/api/user/twoFactor/enable", json={"code": totp.at(clock())}, headers=h).status_code == 200
    return totp


def test_two_factor_toggle_and_login(client, make_user, headers, clock):
    user = make_user()
    h = headers(user["token"])

    # enabling needs a secret first
    r = client.post("/api/user/twoFactor/enable", json={"code": "123456"}, headers=h)
    assert r.status_code == 400

    r = client.post("/api/user/twoFactor/secret", headers=h)
    assert r.status_code == 200
    secret = r.json()["secret"]
    assert r.json()["uri"].startswith("otpauth://totp/")
    totp = pyotp.TOTP(secret)

    now = clock()
    wrong = _wrong_code(totp, now)
    r = client.post("/api/user/twoFactor/enable", json={"code": wrong}, headers=h)
    assert r.status_code == 421

    r = client.post("/api/user/twoFactor/enable", json={"code": totp.at(now)}, headers=h)
    assert r.status_code == 200
    assert client.get("/api/user/", headers=h).json()["two_factor_enabled"] is True

    # no new secret while enabled
    assert client.post("/api/user/twoFactor/secret", headers=h).status_code == 400

    # login now stops at the second factor
    r = client.post("/api/auth/login", json={"email": user["email"], "password": user["password"]})
    assert r.status_code == 242
    two_factor_id = r.json()["two_factor_id"]
    assert "token" not in r.json()

    now = clock()
    wrong = _wrong_code(totp, now)
    r = client.post("/api/auth/twoFactor", json={"two_factor_id": two_factor_id, "code": wrong})
    assert r.status_code == 421

    r = client.post("/api/auth/twoFactor", json={"two_factor_id": two_factor_id, "code": totp.at(now)})
    assert r.status_code == 200
    assert r.json()["token"]

    # the id is spent
    r = client.post("/api/auth/twoFactor", json={"two_factor_id": two_factor_id, "code": totp.at(clock())})
    assert r.status_code == 404

    now = clock()
    r = client.post("/api/user/twoFactor/disable", json={"code": _wrong_code(totp, now)}, headers=h)
    assert r.status_code == 421
    r = client.post("/api/user/twoFactor/disable", json={"code": totp.at(now)}, headers=h)
    assert r.status_code == 200
    assert client.post("/api/user/twoFactor/disable", json={"code": totp.at(clock())}, headers=h).status_code == 400

    r = client.post("/api/auth/login", json={"email": user["email"], "password": user["password"]})
    assert r.status_code == 200


def test_two_factor_code_is_accepted_once(client, make_user, headers, clock):
    user = make_user()
    totp = _enable_two_factor(client, headers(user["token"]), clock)
    credentials = {"email": user["email"], "password": user["password"]}

    code = totp.at(clock())
    first = client.post("/api/auth/login", json=credentials).json()["two_factor_id"]
    assert client.post("/api/auth/twoFactor", json={"two_factor_id": first, "code": code}).status_code == 200

    # same code, same time step, fresh login attempt
    second = client.post("/api/auth/login", json=credentials).json()["two_factor_id"]
    r = client.post("/api/auth/twoFactor", json={"two_factor_id": second, "code": code})
    assert r.status_code == 421

    # an earlier step inside the drift window is refused too
    r = client.post("/api/auth/twoFactor", json={"two_factor_id": second, "code": totp.at(clock() - 30)})
    assert r.status_code == 421

    r = client.post("/api/auth/twoFactor", json={"two_factor_id": second, "code": totp.at(clock())})
    assert r.status_code == 200


def test_two_factor_id_revoked_after_too_many_wrong_codes(client, make_user, headers, clock):
    user = make_user()
    totp = _enable_two_factor(client, headers(user["token"]), clock)

    r = client.post("/api/auth/login", json={"email": user["email"], "password": user["password"]})
    two_factor_id = r.json()["two_factor_id"]

    now = clock()
    wrong = _wrong_code(totp, now)
    for _ in range(cfg.TWO_FACTOR_MAX_ATTEMPTS):
        r = client.post("/api/auth/twoFactor", json={"two_factor_id": two_factor_id, "code": wrong})
        assert r.status_code == 421

    # even the right code is too late now
    r = client.post("/api/auth/twoFactor", json={"two_factor_id": two_factor_id, "code": totp.at(now)})
    assert r.status_code == 404

    # a new login hands out a new id with a fresh allowance
    r = client.post("/api/auth/login", json={"email": user["email"], "password": user["password"]})
    r = client.post("/api/auth/twoFactor", json={"two_factor_id": r.json()["two_factor_id"], "code": totp.at(now)})
    assert r.status_code == 200


def test_accepted_step_refuses_replays(monkeypatch):
    secret = two_factor.generate_secret()
    totp = pyotp.TOTP(secret)
    monkeypatch.setattr(two_factor, "_now", lambda: 1_700_000_000)
    step = 1_700_000_000 // 30

    assert two_factor.accepted_step(secret, totp.at(1_700_000_000)) == step
    assert two_factor.accepted_step(secret, totp.at(1_700_000_000 - 30)) == step - 1
    assert two_factor.accepted_step(secret, totp.at(1_700_000_000), last_step=step) is None
    assert two_factor.accepted_step(secret, totp.at(1_700_000_000 + 30), last_step=step) == step + 1
    assert two_factor.accepted_step(secret, totp.at(1_700_000_000 - 90)) is None
    assert two_factor.accepted_step(None, "123456") is None
    assert two_factor.accepted_step(secret, "") is None


def test_unexpected_error_returns_500(make_user, headers, monkeypatch):
    user = make_user()

    def broken(user):
        raise RuntimeError("boom")

    monkeypatch.setattr("authapp.routers.user.user_out", broken)
    client = TestClient(app, raise_server_exceptions=False)

    r = client.get("/api/user/", headers=headers(user["token"]))
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error"}

    r = client.get("/api/user/", headers={**headers(user["token"]), "locale": "es"})
    assert r.status_code == 500
    assert r.json() == {"message": "Error interno del servidor"}
