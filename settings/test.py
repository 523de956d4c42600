from .base import *

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Keep the test output readable, errors are still reported
LOGGING['loggers']['workshopplus']['level'] = 'ERROR'
