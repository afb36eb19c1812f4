import os
import sys

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test runs to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)


def _exit_with_config_error(name: str, reason: object, expected: str) -> None:
    print(f"\n ERROR: Invalid {name} configuration\n", file=sys.stderr)
    print(f"Reason: {reason}", file=sys.stderr)
    print(f"Expected: {expected}", file=sys.stderr)
    print(f"Current value: {os.environ.get(name, '(not set)')}\n", file=sys.stderr)
    sys.exit(1)


def _positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
        if value <= 0:
            raise ValueError(f"{name} must be positive (got: {value})")
        return value
    except ValueError as e:
        _exit_with_config_error(name, e, "Positive integer")


def _flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() == "true"


# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    _runtime_env_str = os.environ.get("RUNTIME_ENVIRONMENT")
    if not _runtime_env_str:
        raise ValueError("RUNTIME_ENVIRONMENT environment variable is not set")
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(_runtime_env_str)
except ValueError as e:
    _exit_with_config_error(
        "RUNTIME_ENVIRONMENT", e, ", ".join(env.value for env in RuntimeEnvironment)
    )

# Database
DB_URL = os.environ.get("DB_URL", "sqlite+aiosqlite:///data/shop.db")

# Redis (session store)
REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
REDIS_PORT = _positive_int("REDIS_PORT", 6379)
REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD") or None
REDIS_DB = int(os.environ.get("REDIS_DB", "0"))

# Sessions
SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "shop_session")
SESSION_TTL_SECONDS = _positive_int("SESSION_TTL_SECONDS", 86400)
SESSION_COOKIE_SECURE = _flag("SESSION_COOKIE_SECURE", RUNTIME_ENVIRONMENT == RuntimeEnvironment.PROD)

# Password hashing (PBKDF2-HMAC-SHA256)
PASSWORD_HASH_ITERATIONS = _positive_int("PASSWORD_HASH_ITERATIONS", 390000)

# Web server
WEBAPP_HOST = os.environ.get("WEBAPP_HOST", "0.0.0.0")
WEBAPP_PORT = _positive_int("WEBAPP_PORT", 8000)

_cors_origins_str = os.environ.get("CORS_ALLOWED_ORIGINS", "")
CORS_ALLOWED_ORIGINS = [origin.strip() for origin in _cors_origins_str.split(",") if origin.strip()]

SECURITY_HEADERS_ENABLED = _flag("SECURITY_HEADERS_ENABLED", True)
HSTS_ENABLED = _flag("HSTS_ENABLED", False)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_RETENTION_DAYS = _positive_int(
    "LOG_RETENTION_DAYS", 30 if RUNTIME_ENVIRONMENT == RuntimeEnvironment.PROD else 7
)
LOG_MASK_SECRETS = _flag("LOG_MASK_SECRETS", True)
