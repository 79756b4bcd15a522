"""Test settings: in-memory SQLite and quiet logging."""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

SHAREIT = {
    **SHAREIT,  # noqa: F405
    'USER_ID_HEADER': 'X-Sharer-User-Id',
    'DEFAULT_PAGE_SIZE': 10,
    'PREVENT_OVERLAP': True,
}

LOGGING['handlers']['console']['level'] = 'WARNING'  # noqa: F405
