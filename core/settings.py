"""
Django settings for the currency converter project.

Values that differ between environments are read from the process
environment (optionally populated from a .env file).
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-currency-converter-dev-key')

DEBUG = os.getenv('DEBUG', 'True').lower() == 'true'

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')

TESTING = 'test' in sys.argv or 'pytest' in sys.modules

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'drf_spectacular',
    'apps.converter',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'core.urls'

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

WSGI_APPLICATION = 'core.wsgi.application'

if TESTING:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': ':memory:',
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': os.getenv('DATABASE_PATH', str(BASE_DIR / 'db.sqlite3')),
        }
    }

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Django REST Framework
REST_FRAMEWORK = {
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'EXCEPTION_HANDLER': 'apps.converter.api.exceptions.converter_exception_handler',
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Currency Converter API',
    'DESCRIPTION': 'Convert amounts between currencies using a cached upstream rate table',
    'VERSION': '1.0.0',
}

# Upstream rate provider
RATE_PROVIDER = os.getenv('RATE_PROVIDER', 'freecurrency')
FREECURRENCY_API_URL = os.getenv('FREECURRENCY_API_URL', 'https://api.freecurrencyapi.com/v1/latest')
FREECURRENCY_API_KEY = os.getenv('FREECURRENCY_API_KEY', '')
UPSTREAM_TIMEOUT_SECONDS = float(os.getenv('UPSTREAM_TIMEOUT_SECONDS', '10'))
BASE_CURRENCY = os.getenv('BASE_CURRENCY', 'USD')

# Rate cache (server side)
RATE_CACHE_TTL_SECONDS = float(os.getenv('RATE_CACHE_TTL_SECONDS', '3600'))
RATE_CACHE_SERVE_STALE = os.getenv('RATE_CACHE_SERVE_STALE', 'True').lower() == 'true'

# Conversion limits
MAX_CONVERSION_AMOUNT = float(os.getenv('MAX_CONVERSION_AMOUNT', '1e12'))

# Response cache (caller side)
RESPONSE_CACHE_TTL_SECONDS = float(os.getenv('RESPONSE_CACHE_TTL_SECONDS', str(6 * 60 * 60)))
CONVERTER_API_URL = os.getenv('CONVERTER_API_URL', 'http://localhost:8000/api/v1/converter')

# Celery
CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.getenv('CELERY_RESULT_BACKEND', CELERY_BROKER_URL)
CELERY_TASK_ALWAYS_EAGER = TESTING
CELERY_BEAT_SCHEDULE = {
    'refresh-rate-cache': {
        'task': 'refresh_rate_cache',
        'schedule': RATE_CACHE_TTL_SECONDS,
    },
    'purge-expired-responses': {
        'task': 'purge_expired_responses',
        'schedule': RESPONSE_CACHE_TTL_SECONDS,
    },
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'level': 'DEBUG' if DEBUG else 'INFO',
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
        'apps.converter': {
            'level': 'DEBUG' if DEBUG else 'INFO',
        },
    },
}
