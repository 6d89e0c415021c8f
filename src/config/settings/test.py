"""Test settings - uses SQLite for fast local testing."""
from .base import *  # noqa: F401,F403

DEBUG = True

# Use SQLite for tests (no PostgreSQL dependency)
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}
DATABASES["default"]["ATOMIC_REQUESTS"] = False

# Faster password hashing in tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Disable API throttling in tests for deterministic runs
REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []  # noqa: F405
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {  # noqa: F405
    "auth_burst": "1000/min",
    "auth_sustained": "1000/min",
}

# Deterministic business settings
QUOTATION_NUMBER_PREFIX = "Q"
QUOTATION_NUMBER_WIDTH = 5
QUOTATION_PAGE_SIZE = 10
ACCOUNT_PAGE_SIZE = 10

# Disable logging noise during tests
LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["salesdesk"]["handlers"] = ["console"]  # noqa: F405
LOGGING["loggers"]["salesdesk"]["level"] = "WARNING"  # noqa: F405
