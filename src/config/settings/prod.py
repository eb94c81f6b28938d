"""
Django production settings for the VolkovChain services backend.
"""

from .base import *  # noqa: F403
from .base import DEFAULT_FROM_EMAIL, env

DEBUG = False

ALLOWED_HOSTS = env("ALLOWED_HOSTS")

SECRET_KEY = env("SECRET_KEY")

SITE_URL = env("SITE_URL")

# Security settings
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)
SESSION_COOKIE_SECURE = SECURE_SSL_REDIRECT
CSRF_COOKIE_SECURE = SECURE_SSL_REDIRECT
SECURE_HSTS_SECONDS = 31536000 if SECURE_SSL_REDIRECT else 0
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# Order, notification and invoice mail goes out through Mailgun.
# No fallbacks: a missing key or sender domain fails at startup.
EMAIL_BACKEND = "anymail.backends.mailgun.EmailBackend"
ANYMAIL = {
    "MAILGUN_API_KEY": env("MAILGUN_API_KEY"),
    "MAILGUN_SENDER_DOMAIN": env("MAILGUN_DOMAIN"),
}
SERVER_EMAIL = DEFAULT_FROM_EMAIL

ORDER_NOTIFICATION_EMAILS = env.list("ORDER_NOTIFICATION_EMAILS")

# Side effects always run on the worker pool
ORDER_TASKS_ALWAYS_EAGER = False
