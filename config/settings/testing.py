"""
Testing settings for the postboard project.

Inherits from base.py and adds testing-specific configurations.
"""

import tempfile
from pathlib import Path

from .base import *

# Debug mode
DEBUG = False

# Use faster password hasher for tests
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
    'django.contrib.auth.hashers.BCryptPasswordHasher',
]

# In-memory SQLite database for faster tests
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Uploads go to a throwaway directory (tests usually override MEDIA_ROOT with tmp_path)
MEDIA_ROOT = Path(tempfile.gettempdir()) / 'postboard-test-media'

SCHEDULER_API_TOKEN = 'test-scheduler-token'

# Let pytest's caplog see every record
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'root': {
        'level': 'DEBUG',
    },
}
