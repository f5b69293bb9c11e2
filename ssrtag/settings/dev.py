# ssrtag/settings/dev.py
# export DJANGO_SETTINGS_MODULE=ssrtag.settings.dev

from .base import *

DEBUG = True

ALLOWED_HOSTS = ["127.0.0.1", "localhost", "testserver"]

LOGGING["loggers"].update({
    "prerender": {"handlers": ["console"], "level": "DEBUG", "propagate": False},
})
