"""
Settings module initialization.
Selects dev, test or prod settings from the DJANGO_ENV variable (or .env).
"""

from decouple import config

DJANGO_ENV = config('DJANGO_ENV', default='dev')

if DJANGO_ENV == 'prod':
    from .prod import *
elif DJANGO_ENV == 'test':
    from .test import *
else:
    from .dev import *
