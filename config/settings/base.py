"""
Django base settings for the postboard project.

This file contains shared settings used across all environments.
Environment-specific settings are in development.py, testing.py, and production.py.
"""

import os
from pathlib import Path
from datetime import timedelta
from dotenv import load_dotenv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Load secrets from .env file
load_dotenv(BASE_DIR / '.env')

# Django secret key
SECRET_KEY = os.environ.get('SECRET_KEY', 'django-insecure-postboard-dev-key-change-me')

# Database URL
DATABASE_URL = os.environ.get('DATABASE_URL', '')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

# Allowed hosts - override in environment-specific settings
ALLOWED_HOSTS = []


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third-party apps
    'corsheaders',  # CORS headers support
    'drf_spectacular',
    'django_filters',
    'rest_framework',
    'rest_framework_simplejwt',
    'rest_framework_simplejwt.token_blacklist',

    # Local apps
    'users',
    'announcement',
    'images',
    'events',
    'scheduler',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',  # CORS middleware (must be before CommonMiddleware)
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases
# Every store access is bounded: SQLite waits at most `timeout` seconds for a lock.

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
        'OPTIONS': {
            'timeout': int(os.environ.get('DATABASE_TIMEOUT', 20)),
        },
    }
}


# Cache
# The read_cooldown alias backs the announcement read-count de-duplication.
# Point it at a shared backend (e.g. Redis) when running more than one instance.

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'postboard-default',
    },
    'read_cooldown': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'postboard-read-cooldown',
        'OPTIONS': {
            'MAX_ENTRIES': 100000,
        },
    },
}


# Custom User Model
AUTH_USER_MODEL = 'users.User'


# Authentication backends
AUTHENTICATION_BACKENDS = [
    'users.backends.LegacyPasswordBackend',
]


# Password hashing
# BCrypt is kept so that accounts imported from the previous board still verify;
# they are re-hashed with the first hasher on successful login.
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher',
    'django.contrib.auth.hashers.BCryptPasswordHasher',
]


# Password validation
# https://docs.djangoproject.com/en/4.2/ref/settings/#auth-password-validators

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
        'OPTIONS': {'min_length': 6},
    },
]


# Frontend URL (the Vite app sets VITE_API_URL to point back at this server)
FRONTEND_URL = os.environ.get('FRONTEND_URL', 'http://localhost:5173')

CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get('CORS_ALLOWED_ORIGINS', FRONTEND_URL).split(',')
    if origin.strip()
]


# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/

LANGUAGE_CODE = 'zh-hans'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/4.2/howto/static-files/

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Uploaded images live in MEDIA_ROOT/<IMAGE_UPLOAD_SUBDIR>/ and are served from MEDIA_URL
MEDIA_URL = '/media/'
MEDIA_ROOT = Path(os.environ.get('MEDIA_ROOT', BASE_DIR / 'media'))


# Default primary key field type
# https://docs.djangoproject.com/en/4.2/ref/settings/#default-auto-field

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Django REST Framework Configuration
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
    ],
    'DEFAULT_PAGINATION_CLASS': 'config.paginator.StandardResultsSetPagination',
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'EXCEPTION_HANDLER': 'config.exceptions.custom_exception_handler',
}


# Simple JWT Configuration
SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(hours=2),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=7),
    'ROTATE_REFRESH_TOKENS': False,
    'BLACKLIST_AFTER_ROTATION': True,
    'UPDATE_LAST_LOGIN': True,
    'ALGORITHM': 'HS256',
    'SIGNING_KEY': SECRET_KEY,
    'AUTH_HEADER_TYPES': ('Bearer',),
    'AUTH_HEADER_NAME': 'HTTP_AUTHORIZATION',
    'USER_ID_FIELD': 'id',
    'USER_ID_CLAIM': 'user_id',
    'AUTH_TOKEN_CLASSES': ('rest_framework_simplejwt.tokens.AccessToken',),
    'TOKEN_TYPE_CLAIM': 'token_type',
}


# drf-spectacular Configuration
SPECTACULAR_SETTINGS = {
    'TITLE': 'Postboard API',
    'VERSION': '1.0.0',
    'DESCRIPTION': 'School announcement board: announcements, events, images and administrators',
    'SERVE_INCLUDE_SCHEMA': False,
    'COMPONENT_SPLIT_REQUEST': True,
    'SCHEMA_TAGS_SORTING': 'alpha',
    'OPERATION_SORTING': 'alpha',
    'APPEND_COMPONENTS': {
        'securitySchemes': {
            'bearerAuth': {
                'type': 'http',
                'scheme': 'bearer',
                'bearerFormat': 'JWT',
            }
        }
    },
    'SECURITY': [
        {
            'bearerAuth': []
        }
    ],
}


# Announcement board configuration

# Repeated reads of one announcement from one client inside this window count once
READ_COOLDOWN_SECONDS = int(os.environ.get('READ_COOLDOWN_SECONDS', 60))
# Use the first X-Forwarded-For entry as the client address (only behind a trusted proxy)
READ_TRACKING_TRUST_X_FORWARDED_FOR = (
    os.environ.get('READ_TRACKING_TRUST_X_FORWARDED_FOR', 'False').lower() == 'true'
)

IMAGE_UPLOAD_SUBDIR = 'uploads'
IMAGE_MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5MB
# No svg: files are served from the API origin
IMAGE_ALLOWED_EXTENSIONS = {'jpg', 'jpeg', 'png', 'gif', 'webp', 'bmp'}
# Unreferenced images younger than this are kept (an editor may still be drafting)
IMAGE_RETENTION_DAYS = int(os.environ.get('IMAGE_RETENTION_DAYS', 30))

# Super admin bootstrap (see `manage.py ensure_super_admin`)
SUPER_ADMIN_USERNAME = os.environ.get('SUPER_ADMIN_USERNAME', 'admin')
SUPER_ADMIN_PASSWORD = os.environ.get('SUPER_ADMIN_PASSWORD', '')


# Scheduler Configuration
# Each job maps to a dotted path of a callable accepting `now` and a cron period.
SCHEDULER_JOBS = {
    'publish_scheduled_announcements': {
        'task': 'announcement.publishing.publish_due_announcements',
        'period': '* * * * *',
    },
    'purge_orphan_images': {
        'task': 'images.cleanup.purge_orphan_images',
        'period': '0 2 * * *',
    },
}
# Run once when `runscheduler` starts, before the first tick
SCHEDULER_STARTUP_JOBS = ['publish_scheduled_announcements']
SCHEDULER_POLL_SECONDS = 60
# Shared secret for POST /api/scheduler/execute/ (sent as the X-Scheduler-Token header)
SCHEDULER_API_TOKEN = os.environ.get('SCHEDULER_API_TOKEN', '')


# Logging
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'announcement': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'images': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'events': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'scheduler': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'users': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}
