"""Production settings for the ShareIt project.

This module extends the base settings with production specific
configuration. Ensure that sensitive values are provided via
environment variables.
"""

import os

from django.core.exceptions import ImproperlyConfigured  # type: ignore

from .base import *  # noqa: F401,F403

# Never run with debug enabled in production
DEBUG = False

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = [host for host in os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',') if host]

if SECRET_KEY == 'replace-me-in-production':  # noqa: F405
    raise ImproperlyConfigured('DJANGO_SECRET_KEY must be set in production')

# Configure secure proxies and cookies
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
