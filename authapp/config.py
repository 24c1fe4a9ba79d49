import os

SECRET_KEY = os.environ.get("SECRET_KEY", "TU_SECRET_KEY_TEMPORAL")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# Default to local SQLite for dev/tests; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./authapp.db")

# Roles are read from the user's registration for this application only
APPLICATION_ID = os.environ.get("APPLICATION_ID", "3c219e58-ed0e-4b18-ad48-f4f92793ae32")
DEFAULT_ROLES = [r.strip() for r in os.environ.get("DEFAULT_ROLES", "user").split(",") if r.strip()]

VERIFY_TOKEN_EXPIRE_MINUTES = float(os.environ.get("VERIFY_TOKEN_EXPIRE_MINUTES", 60 * 24))
RESET_TOKEN_EXPIRE_MINUTES = float(os.environ.get("RESET_TOKEN_EXPIRE_MINUTES", 30))
TWO_FACTOR_TOKEN_EXPIRE_MINUTES = float(os.environ.get("TWO_FACTOR_TOKEN_EXPIRE_MINUTES", 5))
TWO_FACTOR_ISSUER = os.environ.get("TWO_FACTOR_ISSUER", "AuthApp")
# wrong codes allowed per two-factor id before it is revoked
TWO_FACTOR_MAX_ATTEMPTS = int(os.environ.get("TWO_FACTOR_MAX_ATTEMPTS", 5))

FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")

ENABLE_EMAIL = os.environ.get("ENABLE_EMAIL", "false").lower() in ("true", "1", "yes")
SMTP_HOST = os.environ.get("SMTP_HOST", "localhost")
SMTP_PORT = int(os.environ.get("SMTP_PORT", 587))
SMTP_USERNAME = os.environ.get("SMTP_USERNAME", "")
SMTP_PASSWORD = os.environ.get("SMTP_PASSWORD", "")
EMAIL_FROM = os.environ.get("EMAIL_FROM", "noreply@authapp.local")

DEFAULT_LOCALE = os.environ.get("DEFAULT_LOCALE", "en")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
