"""
POS – Django Settings (Infrastructure Only)
============================================
Django serves as the HTTP container for the POS back office.
The domain store is in memory; Django does not own any models.

POS_* settings are read once by adapters.django_api.wiring through
core.config.AppSettings.from_django().
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("POS_SECRET_KEY", "pos-dev-key-replace-before-deployment")

DEBUG = os.environ.get("POS_DEBUG", "1") == "1"

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

# ── Installed Apps ────────────────────────────────────────────
# Django infrastructure only. The POS packages are plain Python.
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# Required by contrib apps only; POS data never touches it.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── POS ───────────────────────────────────────────────────────
POS_ADMIN_ROLE_ID = os.environ.get("POS_ADMIN_ROLE_ID", "admin")
POS_INSIGHTS_URL = os.environ.get(
    "POS_INSIGHTS_URL", "http://localhost:3000/api/generate-insights"
)
POS_CHAT_URL = os.environ.get("POS_CHAT_URL", "http://localhost:3000/api/chat")
POS_INSIGHTS_TIMEOUT = float(os.environ.get("POS_INSIGHTS_TIMEOUT", "30"))
POS_REPORT_TIMEZONE = os.environ.get("POS_REPORT_TIMEZONE", "")

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "pos": {
            "handlers": ["console"],
            "level": os.environ.get("POS_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
