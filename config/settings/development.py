"""
Development settings for the postboard project.

Inherits from base.py and adds development-specific configurations.
"""

import dj_database_url
from .base import *  # noqa: F403, F405

# Debug mode
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ["*"]

# CORS settings for development
CORS_ALLOW_ALL_ORIGINS = True  # Allow all origins in development
CORS_ALLOW_CREDENTIALS = True

# Fixed scheduler token locally unless one is configured
SCHEDULER_API_TOKEN = SCHEDULER_API_TOKEN or "dev-scheduler-token"  # noqa: F405

if DATABASE_URL:  # noqa: F405
    DATABASES["default"] = dj_database_url.config(  # noqa: F405
        default=DATABASE_URL, conn_max_age=0  # noqa: F405
    )
