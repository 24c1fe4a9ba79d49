import os
import uuid

# point the app at a throwaway database before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_authapp.db")
os.environ.setdefault("ENABLE_EMAIL", "false")

import pytest
from fastapi.testclient import TestClient

from authapp.main import app
from authapp.database import SessionLocal, Base, engine
from authapp.models.action_token import ActionToken, VERIFY
from authapp.models.registration import Registration
from authapp.models.user import User
from authapp.seed import seed_route_roles

PASSWORD = "SecurePass123!"


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_route_roles(db)
    finally:
        db.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def pending_token(email: str, kind: str = VERIFY):
    """Latest one-time id of ``kind`` issued to ``email``."""
    db = SessionLocal()
    try:
        row = (
            db.query(ActionToken)
            .join(User, User.id == ActionToken.user_id)
            .filter(User.email == email, ActionToken.kind == kind)
            .order_by(ActionToken.id.desc())
            .first()
        )
        return row.token if row else None
    finally:
        db.close()


def set_roles(email: str, roles):
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
        registration = db.query(Registration).filter(Registration.user_id == user.id).first()
        registration.roles = list(roles)
        db.commit()
    finally:
        db.close()


@pytest.fixture
def pending():
    return pending_token


@pytest.fixture
def assign_roles():
    return set_roles


@pytest.fixture
def make_user(client):
    """Sign up, verify and log in a fresh user. Returns email, password, id and token."""
    def factory(password=PASSWORD, roles=None, verify=True, login=True):
        email = f"user_{uuid.uuid4().hex[:8]}@example.com"
        r = client.post("/api/auth/signup", json={
            "email": email, "password": password, "first_name": "Ada", "last_name": "Lovelace",
        })
        assert r.status_code == 200
        user = {"email": email, "password": password, "id": r.json()["id"], "token": None}
        if roles is not None:
            set_roles(email, roles)
        if verify:
            r = client.post("/api/auth/verifyEmail", json={"verification_id": pending_token(email)})
            assert r.status_code == 200
        if verify and login:
            r = client.post("/api/auth/login", json={"email": email, "password": password})
            assert r.status_code == 200
            user["token"] = r.json()["token"]
        return user
    return factory


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers():
    return auth
