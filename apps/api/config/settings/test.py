# apps/api/config/settings/test.py
from .base import *

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

HRD_ATTENDANCE_URL = "https://registry.test/attendance"
HRD_AUTH_KEY = "test-auth-key"

LOGGING["root"]["level"] = "WARNING"
