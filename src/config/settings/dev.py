"""Development settings."""
from .base import *  # noqa: F401,F403

DEBUG = True

# CORS
CORS_ALLOW_ALL_ORIGINS = True

# Longer-lived tokens while developing against the SPA.
SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"] = timedelta(hours=8)  # noqa: F405

# Logging
LOGGING["root"]["level"] = "DEBUG"  # noqa: F405
