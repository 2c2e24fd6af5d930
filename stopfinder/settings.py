"""
Django settings for the stopfinder project.

Every value that differs between deployments is read from the environment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    # Tolerate inline comments from .env files, e.g. "True  # dev only"
    return value.split("#", 1)[0].strip().lower() in ("1", "true", "yes", "on")


def env_int(name, default=None):
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-stopfinder-dev-key")

DEBUG = env_bool("DEBUG", False)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]


# Application definition

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "django_filters",
    "drf_spectacular",
    "gtfs",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "stopfinder.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "stopfinder.wsgi.application"


# Database
# SQLite unless DB_NAME points at a server database (PostgreSQL, MySQL)

if os.environ.get("DB_NAME"):
    DATABASES = {
        "default": {
            "ENGINE": os.environ.get("DB_ENGINE", "django.db.backends.postgresql"),
            "NAME": os.environ["DB_NAME"],
            "USER": os.environ.get("DB_USER", ""),
            "PASSWORD": os.environ.get("DB_PASSWORD", ""),
            "HOST": os.environ.get("DB_HOST", "localhost"),
            "PORT": os.environ.get("DB_PORT", ""),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Internationalization

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("TIME_ZONE", "Europe/Tallinn")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"


# Django REST Framework

REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_FILTER_BACKENDS": ["django_filters.rest_framework.DjangoFilterBackend"],
}

SPECTACULAR_SETTINGS = {
    "TITLE": "stopfinder API",
    "DESCRIPTION": "Stops, routes and upcoming scheduled arrivals for the next 24 hours.",
    "VERSION": "1.0.0",
}


# Route listing cache

CACHE_BACKEND = os.environ.get("CACHE_BACKEND", "memory")
ROUTE_LISTING_CACHE_TTL_MS = env_int("ROUTE_LISTING_CACHE_TTL_MS", 5 * 60 * 1000)
CACHE_MAX_ENTRIES = env_int("CACHE_MAX_ENTRIES")
REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
REDIS_PORT = env_int("REDIS_PORT", 6379)


# Arrivals

ARRIVALS_PAGE_SIZE = env_int("ARRIVALS_PAGE_SIZE", 5)
ARRIVALS_WINDOW_MINUTES = env_int("ARRIVALS_WINDOW_MINUTES", 1440)
ARRIVALS_MAX_RESULTS = env_int("ARRIVALS_MAX_RESULTS", 200)
ARRIVALS_QUERY_LIMIT = env_int("ARRIVALS_QUERY_LIMIT", 500)


# Logging

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.environ.get("LOG_LEVEL", "INFO"),
    },
}
