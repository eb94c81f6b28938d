"""
Django test settings for the VolkovChain services backend.
"""

from .base import *  # noqa: F403
from .base import BASE_DIR, env

DEBUG = False

SECRET_KEY = "django-insecure-test-key-only"  # noqa: S105

ALLOWED_HOSTS = ["*"]

# Use fast password hasher for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Use in-memory email backend
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# Use DATABASE_URL if set (Docker), otherwise fall back to SQLite
DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR.parent / 'test.sqlite3'}"),
}

# Use simple static files storage in tests
STORAGES = {
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

# Run order side effects inline, without delays or backoff
ORDER_TASKS_ALWAYS_EAGER = True
ORDER_TASK_RETRY_DELAYS = [0, 0, 0]
INVOICE_GENERATION_DELAY = 0

ORDER_NOTIFICATION_EMAILS = ["team@example.com"]
MANAGEMENT_WEBHOOK_URL = ""
