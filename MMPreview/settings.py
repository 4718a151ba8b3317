"""
Django settings for MMPreview.

Only what the preview app needs: no database models, sessions or auth.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-development-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"

ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "preview",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
]

ROOT_URLCONF = "MMPreview.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

DATABASES = {}

STATIC_URL = "static/"

# Preview options, see preview/conf.py for the full list and defaults
MULTIMARKDOWN = {
    "task_lists": True,
    "icon_bullets": False,
    "parsing_timeout": int(os.environ.get("MULTIMARKDOWN_PARSING_TIMEOUT", "10000")),
    "html_theme": os.environ.get("MULTIMARKDOWN_HTML_THEME", "light"),
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "preview": {
            "handlers": ["console"],
            "level": os.environ.get("MULTIMARKDOWN_LOG_LEVEL", "INFO"),
        },
    },
}
