"""
Test settings for the BOM service.
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

SECRET_KEY = 'bom-service-test-key'

# =============================================================================
# DATABASE - In-memory SQLite
# =============================================================================
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

# =============================================================================
# BOM - small guards so limit handling is easy to exercise
# =============================================================================
BOM_TREE_MAX_DEPTH = 16
BOM_TREE_MAX_NODES = 500

# =============================================================================
# LOGGING - Tests
# =============================================================================
for logger_name in APP_LOGGERS:
    LOGGING['loggers'][logger_name]['level'] = 'WARNING'
