"""
Test settings.
"""
from .base import *  # noqa: F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

MESSAGING_RPC_TIMEOUT = 1.0
ORDERS_CURRENCY = 'usd'
