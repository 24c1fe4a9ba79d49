import sys
from pathlib import Path

# ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient
from authapp.main import app

client = TestClient(app)
email = "quick_test_user@example.com"
password = "correct_horse_battery_staple"
r = client.post("/api/auth/signup", json={"email": email, "password": password, "first_name": "Quick", "last_name": "Test"})
print('status', r.status_code)
try:
    print('json:', r.json())
except Exception:
    print('text:', r.text)

r = client.post("/api/auth/login", json={"email": email, "password": password})
print('login status', r.status_code)
print('login json:', r.json())
