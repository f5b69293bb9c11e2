# apps/prerender/apps.py
from django.apps import AppConfig
import logging
import os

log = logging.getLogger("apps.prerender.apps")


class PrerenderAppConfig(AppConfig):
    name = "apps.prerender"
    verbose_name = "Prerender"
    # namespace package: pin the location instead of letting Django guess from __path__
    path = os.path.dirname(os.path.abspath(__file__))

    def ready(self):
        # connects the setting_changed receiver and validates PRERENDER at boot
        from . import conf

        log.info("PrerenderAppConfig ready: component root=%s", conf.get_config().component_root)
