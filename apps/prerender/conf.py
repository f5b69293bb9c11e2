# apps/prerender/conf.py
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.signals import setting_changed
from django.dispatch import receiver
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

DEFAULT_COMPONENT_ROOT = "./modules/"
DEFAULT_RENDERER = "apps.prerender.renderer.render_component_to_string"


class PrerenderConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    component_root: str = DEFAULT_COMPONENT_ROOT
    renderer: str = DEFAULT_RENDERER
    component_attr: str = "Component"

    @field_validator("component_root", "renderer", "component_attr")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


def _raw_settings() -> Dict[str, Any]:
    raw = getattr(settings, "PRERENDER", None) or {}
    if not isinstance(raw, dict):
        raise ImproperlyConfigured("PRERENDER must be a dict.")
    return raw


@lru_cache(maxsize=1)
def get_config() -> PrerenderConfig:
    """
    Reads settings.PRERENDER once and validates it.
    Cache is dropped on setting_changed (override_settings in tests).
    """
    try:
        return PrerenderConfig.model_validate(_raw_settings())
    except ValidationError as e:
        raise ImproperlyConfigured(f"Invalid PRERENDER settings: {e}") from e


def invalidate_config_cache() -> None:
    get_config.cache_clear()


@receiver(setting_changed)
def _on_setting_changed(sender, setting: str, **kwargs) -> None:
    if setting == "PRERENDER":
        invalidate_config_cache()
