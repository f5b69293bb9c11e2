# ssrtag/settings/test.py
from .base import *  # noqa: F401,F403

DEBUG = False

PRERENDER = {
    "component_root": str(BASE_DIR / "apps" / "prerender" / "tests" / "fixtures" / "components"),
}

LOGGING["root"]["level"] = "WARNING"
LOGGING["loggers"].update({
    "prerender": {"handlers": ["console"], "level": "WARNING", "propagate": False},
})
