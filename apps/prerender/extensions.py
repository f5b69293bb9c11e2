# apps/prerender/extensions.py
"""
Rendering extensions, per template engine.

The generated node calls get_extension(engine, "react")(path, props). Each
Engine carries its own table; engines without an entry fall back to the
renderer configured in settings.PRERENDER["renderer"].
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Callable, Dict, Mapping, Optional
from weakref import WeakKeyDictionary

from django.core.exceptions import ImproperlyConfigured
from django.template import Engine
from django.utils.module_loading import import_string

from apps.prerender.conf import get_config

log = logging.getLogger("prerender.extensions")

EXTENSION_NAME = "react"

Renderer = Callable[[str, Mapping[str, Any]], str]

_EXTENSIONS: "WeakKeyDictionary[Engine, Dict[str, Renderer]]" = WeakKeyDictionary()


def as_engine(engine) -> Engine:
    """Accepts an Engine or a DjangoTemplates backend (which wraps one)."""
    target = getattr(engine, "engine", engine)
    if not isinstance(target, Engine):
        raise TypeError(f"Expected a Django template Engine, got {type(engine).__name__}.")
    return target


@lru_cache(maxsize=16)
def _import_callable(dotted_path: str) -> Renderer:
    try:
        func = import_string(dotted_path)
    except ImportError as e:
        log.error("Renderer import failed for %s: %s", dotted_path, e)
        raise ImproperlyConfigured(f"Cannot import component renderer '{dotted_path}'.") from e
    if not callable(func):
        raise ImproperlyConfigured(f"Component renderer '{dotted_path}' is not callable.")
    return func


def default_extension() -> Renderer:
    return _import_callable(get_config().renderer)


def set_extension(engine, name: str, func: Renderer) -> None:
    if not callable(func):
        raise TypeError(f"Extension '{name}' must be callable.")
    _EXTENSIONS.setdefault(as_engine(engine), {})[name] = func


def get_extension(engine: Optional[Engine], name: str = EXTENSION_NAME) -> Renderer:
    if engine is not None:
        func = _EXTENSIONS.get(as_engine(engine), {}).get(name)
        if func is not None:
            return func
    return default_extension()
