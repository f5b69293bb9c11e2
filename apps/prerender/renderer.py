# apps/prerender/renderer.py
"""
Default rendering extension: server-renders a component module found by path.

A component module is a Python file exposing a callable (by default
`Component`). It is called with the props mapping; when the result has a
`render()` method, that is called too. The final value is the markup.

    # modules/HelloMessage.py
    class Component:
        def __init__(self, props):
            self.props = props

        def render(self):
            return f"<p>Hello, {self.props.get('name', 'you')}!</p>"
"""
from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from functools import lru_cache
from pathlib import Path
from types import ModuleType
from typing import Any, List, Mapping, Optional

from apps.prerender.conf import get_config
from apps.prerender.exceptions import ComponentResolutionError

log = logging.getLogger("prerender.renderer")


def _candidate_files(full_path: str) -> List[Path]:
    path = Path(full_path)
    if path.suffix == ".py":
        return [path]
    return [path.with_name(path.name + ".py"), path / "__init__.py"]


def _module_name(source: Path) -> str:
    label = source.parent.name if source.name == "__init__.py" else source.stem
    digest = hashlib.sha1(str(source).encode("utf-8")).hexdigest()[:12]
    return f"prerender_component_{label}_{digest}"


@lru_cache(maxsize=128)
def load_component_module(full_path: str) -> ModuleType:
    """Loads (once per path) the module behind a resolved component path."""
    source = next((c for c in _candidate_files(full_path) if c.is_file()), None)
    if source is None:
        log.error("Component module not found for path=%s", full_path)
        raise ComponentResolutionError(full_path, "no module file found")

    name = _module_name(source)
    search = [str(source.parent)] if source.name == "__init__.py" else None
    spec = importlib.util.spec_from_file_location(name, source, submodule_search_locations=search)
    if spec is None or spec.loader is None:
        raise ComponentResolutionError(full_path, f"cannot load {source}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(name, None)
        log.exception("Component import failed (%s)", source)
        raise ComponentResolutionError(full_path, f"import failed: {e}") from e
    log.debug("Component module loaded: %s -> %s", full_path, source)
    return module


def clear_component_cache() -> None:
    load_component_module.cache_clear()


def render_component_to_string(full_path: str, props: Optional[Mapping[str, Any]] = None) -> str:
    module = load_component_module(full_path)
    attr = get_config().component_attr
    component = getattr(module, attr, None)
    if not callable(component):
        log.error("Component module %s has no callable '%s'", full_path, attr)
        raise ComponentResolutionError(full_path, f"module does not expose a callable '{attr}'")

    instance = component(dict(props or {}))
    render = getattr(instance, "render", None)
    markup = render() if callable(render) else instance
    return str(markup)
