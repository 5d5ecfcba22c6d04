"""
FuelLedger — Test Settings

Used by pytest (see [tool.pytest.ini_options] in pyproject.toml).
A file-backed SQLite database is used so that worker threads in the
concurrency tests open real, independent connections.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

SECRET_KEY = 'test-secret-key'

ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'fuelledger.sqlite3',  # noqa: F405
        'OPTIONS': {
            'transaction_mode': 'IMMEDIATE',
            'timeout': 60,
        },
        'TEST': {
            'NAME': BASE_DIR / 'test_fuelledger.sqlite3',  # noqa: F405
        },
    },
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = False
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

LOGGING['loggers']['fuelledger']['level'] = 'WARNING'  # noqa: F405
# pytest's caplog listens on the root logger
LOGGING['loggers']['fuelledger']['propagate'] = True  # noqa: F405
