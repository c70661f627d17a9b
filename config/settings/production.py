"""
Production settings for the postboard project.

Inherits from base.py and adds production-specific configurations.
"""

import os
import dj_database_url
from .base import *  # noqa: F403, F405

# Debug mode
DEBUG = False

# Security settings
SECURE_SSL_REDIRECT = os.environ.get("SECURE_SSL_REDIRECT", "True").lower() == "true"
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True

# Allowed hosts should be configured via environment variable in production
ALLOWED_HOSTS = [host for host in os.environ.get("ALLOWED_HOSTS", "").split(",") if host]

if SECRET_KEY.startswith("django-insecure"):  # noqa: F405
    raise ValueError(
        "SECRET_KEY environment variable is required in production. "
        "Add it to your .env file: SECRET_KEY=<random string>"
    )

if not SCHEDULER_API_TOKEN:  # noqa: F405
    raise ValueError(
        "SCHEDULER_API_TOKEN environment variable is required in production. "
        "Add it to your .env file: SCHEDULER_API_TOKEN=<random string>"
    )

# A single SQLite file is the default store; DATABASE_URL switches to another engine
if DATABASE_URL:  # noqa: F405
    DATABASES["default"] = dj_database_url.config(  # noqa: F405
        default=DATABASE_URL,  # noqa: F405
        conn_max_age=600,
    )
    if DATABASES["default"]["ENGINE"] == "django.db.backends.postgresql":  # noqa: F405
        DATABASES["default"].setdefault("OPTIONS", {})["connect_timeout"] = 10  # noqa: F405
