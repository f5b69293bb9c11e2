# apps/prerender/registration.py
from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from django import template

from apps.prerender.extensions import EXTENSION_NAME, Renderer, as_engine, default_extension, set_extension
from apps.prerender.tag.nodes import react_tag

log = logging.getLogger("prerender.registration")

DEFAULT_TAG_NAME = "react"


def use_tag(
    engine,
    custom_name: Optional[str] = None,
    *,
    renderer: Optional[Renderer] = None,
    component_root: Optional[str] = None,
) -> template.Library:
    """
    Enables the component tag on one engine, without {% load %}.

      from django.template import engines
      use_tag(engines["django"], "component", component_root=BASE_DIR / "ui")

    Registers the rendering extension under "react" for that engine and adds
    a builtin library binding the tag to `custom_name` (default "react").
    Templates already compiled are not affected.
    """
    target = as_engine(engine)
    set_extension(target, EXTENSION_NAME, renderer or default_extension())

    name = custom_name or DEFAULT_TAG_NAME
    root = str(component_root) if component_root is not None else None
    library = template.Library()
    library.tag(name, partial(react_tag, component_root=root))
    target.template_builtins.append(library)

    log.info("Component tag '%s' enabled (root=%s)", name, root or "<settings>")
    return library
